"""Tests for kg_learn.learning.gaps."""

from kg_learn.learning.gaps import BEGINNER_BASELINE, SkillGapAnalyzer
from kg_learn.models import Difficulty, RelationType, TechNodeData


class TestComputeGaps:
    def test_close_known_skill(self, seeded):
        gaps = seeded.analyzer.compute_gaps(["JavaScript"], ["React"])
        assert len(gaps) == 1
        gap = gaps[0]
        assert gap.from_skill == "JavaScript"
        assert gap.to_skill == "React"
        assert gap.difficulty == Difficulty.INTERMEDIATE
        assert gap.estimated_hours == 40

    def test_two_hops_still_close(self, seeded):
        gap = seeded.analyzer.compute_gaps(["JavaScript"], ["NestJS"])[0]
        assert gap.from_skill == "JavaScript"
        assert gap.difficulty == Difficulty.ADVANCED
        assert gap.estimated_hours == 80

    def test_no_skills_starts_from_baseline(self, seeded):
        gap = seeded.analyzer.compute_gaps([], ["React"])[0]
        assert gap.from_skill == BEGINNER_BASELINE

    def test_one_gap_per_target_in_order(self, seeded):
        gaps = seeded.analyzer.compute_gaps(["JavaScript"], ["Docker", "React", "Redis"])
        assert [gap.to_skill for gap in gaps] == ["Docker", "React", "Redis"]
        assert gaps[2].difficulty == Difficulty.BEGINNER
        assert gaps[2].estimated_hours == 20

    def test_unknown_target(self, seeded):
        gap = seeded.analyzer.compute_gaps(["JavaScript"], ["Rust"])[0]
        assert gap.from_skill == BEGINNER_BASELINE
        assert gap.difficulty == Difficulty.INTERMEDIATE
        assert gap.estimated_hours == 40

    def test_unknown_current_skill_skipped(self, seeded):
        gap = seeded.analyzer.compute_gaps(["Cobol", "JavaScript"], ["React"])[0]
        assert gap.from_skill == "JavaScript"

    def test_first_close_skill_wins(self, seeded):
        gap = seeded.analyzer.compute_gaps(["Vue.js", "JavaScript"], ["React"])[0]
        assert gap.from_skill == "Vue.js"

    def test_disconnected_skill_counts_as_close(self, seeded):
        # The one-node fallback path is short enough.
        gap = seeded.analyzer.compute_gaps(["Git"], ["React"])[0]
        assert gap.from_skill == "Git"


class TestFindClosestSkill:
    def _chain(self, store, labels):
        ids = [store.add_node(TechNodeData(label=label, category="tool")) for label in labels]
        for left, right in zip(ids, ids[1:]):
            store.add_edge(left, right, RelationType.USES)

    def test_too_far(self, store, engine):
        self._chain(store, ["A", "B", "C", "D"])
        analyzer = SkillGapAnalyzer(engine)
        assert analyzer.find_closest_skill(["A"], "D") is None
        assert analyzer.find_closest_skill(["B"], "D") == "B"

    def test_custom_threshold(self, store, engine):
        self._chain(store, ["A", "B", "C", "D"])
        analyzer = SkillGapAnalyzer(engine, max_path_nodes=4)
        assert analyzer.find_closest_skill(["A"], "D") == "A"

    def test_unknown_target(self, seeded):
        assert seeded.analyzer.find_closest_skill(["JavaScript"], "Rust") is None

    def test_estimated_hours_for(self, seeded):
        assert seeded.analyzer.estimated_hours_for("Kubernetes") == 80
        assert seeded.analyzer.estimated_hours_for("Git") == 20
