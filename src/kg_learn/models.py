"""Pydantic data models — unified definitions for the entire project."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from kg_learn.utils import utc_now_iso


class TechCategory(str, Enum):
    PROGRAMMING_LANGUAGE = "programming-language"
    FRAMEWORK = "framework"
    LIBRARY = "library"
    DATABASE = "database"
    TOOL = "tool"
    PLATFORM = "platform"
    SERVICE = "service"
    PROTOCOL = "protocol"
    STANDARD = "standard"


class Difficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"


class SkillLevel(str, Enum):
    NONE = "none"
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"


class RelationType(str, Enum):
    DEPENDS_ON = "depends-on"
    EXTENDS = "extends"
    USES = "uses"
    RELATED_TO = "related-to"
    ALTERNATIVE_TO = "alternative-to"
    PART_OF = "part-of"
    IMPLEMENTS = "implements"
    CREATED_BY = "created-by"
    MAINTAINED_BY = "maintained-by"
    PREREQUISITE = "prerequisite"


class LearningNodeType(str, Enum):
    CONCEPT = "concept"
    TUTORIAL = "tutorial"
    PRACTICE = "practice"
    PROJECT = "project"
    ASSESSMENT = "assessment"
    REVIEW = "review"
    LESSON = "lesson"


class ResourceType(str, Enum):
    ARTICLE = "article"
    VIDEO = "video"
    COURSE = "course"
    BOOK = "book"
    DOCUMENTATION = "documentation"
    TUTORIAL = "tutorial"
    EXERCISE = "exercise"
    PROJECT = "project"
    TOOL = "tool"
    REFERENCE = "reference"


class AudienceTier(str, Enum):
    NOVICE = "novice"
    JUNIOR = "junior"
    INTERMEDIATE = "intermediate"
    SENIOR = "senior"


# Ordinal rank used for sorting and max() over difficulties.
DIFFICULTY_RANK: dict[Difficulty, int] = {
    Difficulty.BEGINNER: 1,
    Difficulty.INTERMEDIATE: 2,
    Difficulty.ADVANCED: 3,
    Difficulty.EXPERT: 4,
}

# Estimated study hours per learning-curve difficulty.
DIFFICULTY_HOURS: dict[Difficulty, int] = {
    Difficulty.BEGINNER: 20,
    Difficulty.INTERMEDIATE: 40,
    Difficulty.ADVANCED: 80,
    Difficulty.EXPERT: 120,
}

SKILL_LEVEL_RANK: dict[SkillLevel, int] = {
    SkillLevel.NONE: 0,
    SkillLevel.BEGINNER: 1,
    SkillLevel.INTERMEDIATE: 2,
    SkillLevel.ADVANCED: 3,
    SkillLevel.EXPERT: 4,
}

# Informational ranking weight per relation type; traversal ignores it.
EDGE_WEIGHTS: dict[RelationType, float] = {
    RelationType.DEPENDS_ON: 1.0,
    RelationType.EXTENDS: 0.9,
    RelationType.USES: 0.8,
    RelationType.RELATED_TO: 0.6,
    RelationType.ALTERNATIVE_TO: 0.4,
    RelationType.PART_OF: 0.7,
    RelationType.IMPLEMENTS: 0.8,
    RelationType.CREATED_BY: 0.3,
    RelationType.MAINTAINED_BY: 0.3,
    RelationType.PREREQUISITE: 1.0,
}
DEFAULT_EDGE_WEIGHT = 0.5


def edge_weight(rel_type: RelationType) -> float:
    return EDGE_WEIGHTS.get(rel_type, DEFAULT_EDGE_WEIGHT)


def difficulty_rank(difficulty: Difficulty) -> int:
    return DIFFICULTY_RANK.get(difficulty, DIFFICULTY_RANK[Difficulty.INTERMEDIATE])


# ---------------------------------------------------------------------------
# Knowledge Graph primitives
# ---------------------------------------------------------------------------

class TechNodeData(BaseModel):
    """Registration payload for a technology; the store assigns the id."""

    label: str = Field(min_length=1)
    category: TechCategory
    description: str = ""
    popularity: float = Field(default=50.0, ge=0.0, le=100.0)
    learning_curve: Difficulty = Difficulty.INTERMEDIATE
    tags: list[str] = Field(default_factory=list)
    version: str | None = None
    official_site: str | None = None
    documentation: str | None = None
    repository: str | None = None
    license: str | None = None


class TechNode(TechNodeData):
    """A technology in the knowledge graph."""

    id: str
    created_at: str = Field(default_factory=utc_now_iso)
    updated_at: str = Field(default_factory=utc_now_iso)


class Edge(BaseModel):
    """A typed relationship between two technologies."""

    id: str
    source: str
    target: str
    type: RelationType
    weight: float = DEFAULT_EDGE_WEIGHT


class GraphMetadata(BaseModel):
    version: str = "1.0.0"
    created_at: str = Field(default_factory=utc_now_iso)
    updated_at: str = Field(default_factory=utc_now_iso)
    node_count: int
    edge_count: int
    categories: list[TechCategory] = Field(default_factory=list)


class GraphExport(BaseModel):
    nodes: list[TechNode]
    edges: list[Edge]
    metadata: GraphMetadata


class NodeFilters(BaseModel):
    """Recognized filters for technology search."""

    category: TechCategory | None = None
    difficulty: Difficulty | None = None
    min_popularity: float | None = Field(default=None, ge=0.0, le=100.0)


# ---------------------------------------------------------------------------
# Learners and gaps
# ---------------------------------------------------------------------------

class UserSkill(BaseModel):
    name: str
    level: SkillLevel = SkillLevel.NONE


class UserProfile(BaseModel):
    """Learner profile supplied by an external provider."""

    user_id: str = "anonymous"
    skills: list[UserSkill] = Field(default_factory=list)

    def skill_names(self) -> list[str]:
        return [skill.name for skill in self.skills]


class SkillGap(BaseModel):
    from_skill: str
    to_skill: str
    difficulty: Difficulty
    estimated_hours: int


# ---------------------------------------------------------------------------
# Learning paths
# ---------------------------------------------------------------------------

class LearningResource(BaseModel):
    id: str
    title: str
    type: ResourceType
    url: str | None = None
    difficulty: Difficulty = Difficulty.BEGINNER
    tags: list[str] = Field(default_factory=list)
    free: bool = True


class LearningNode(BaseModel):
    """One scheduled unit of study inside a learning path."""

    id: str
    skill_id: str
    title: str
    description: str = ""
    type: LearningNodeType = LearningNodeType.LESSON
    estimated_hours: float = Field(default=0.0, ge=0.0)
    difficulty: Difficulty = Difficulty.INTERMEDIATE
    prerequisites: list[str] = Field(default_factory=list)
    resources: list[LearningResource] = Field(default_factory=list)
    order: int = 0


class LearningPath(BaseModel):
    """An ordered curriculum towards a set of target skills."""

    id: str
    title: str
    description: str = ""
    target_audience: str = AudienceTier.NOVICE.value
    estimated_duration: float = Field(default=0.0, ge=0.0)
    difficulty: Difficulty = Difficulty.BEGINNER
    nodes: list[LearningNode] = Field(default_factory=list)
    prerequisites: list[str] = Field(default_factory=list)
    outcomes: list[str] = Field(default_factory=list)
    created_by: str = "system"
    created_at: str = Field(default_factory=utc_now_iso)
    updated_at: str = Field(default_factory=utc_now_iso)
    tags: list[str] = Field(default_factory=list)

    def find_node(self, node_id: str) -> LearningNode | None:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None


class PathFilters(BaseModel):
    """Recognized filters for learning-path search."""

    difficulty: list[Difficulty] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    target_audience: str | None = None


class PathStats(BaseModel):
    total_paths: int
    paths_by_difficulty: dict[str, int]
    paths_by_category: dict[str, int]
    average_duration: int


class TagCount(BaseModel):
    tag: str
    count: int


