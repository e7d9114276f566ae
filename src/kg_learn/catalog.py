"""Default technology catalog and authored learning paths.

Nothing here runs implicitly: the HTTP app and the CLI call
:func:`seed_default_catalog` / :func:`default_learning_paths` when
``KG_SEED_CATALOG`` is enabled.
"""

from __future__ import annotations

import logging

from kg_learn.models import (
    Difficulty,
    LearningNode,
    LearningNodeType,
    LearningPath,
    LearningResource,
    RelationType,
    ResourceType,
    TechCategory,
    TechNodeData,
)
from kg_learn.storage.base import BaseTechGraphStore

logger = logging.getLogger(__name__)

DEFAULT_TECHNOLOGIES: list[TechNodeData] = [
    # Frontend
    TechNodeData(
        label="JavaScript",
        category=TechCategory.PROGRAMMING_LANGUAGE,
        description="Dynamic language at the core of web development",
        popularity=95,
        learning_curve=Difficulty.INTERMEDIATE,
        tags=["programming", "web", "frontend", "backend"],
    ),
    TechNodeData(
        label="TypeScript",
        category=TechCategory.PROGRAMMING_LANGUAGE,
        description="Typed superset of JavaScript",
        popularity=85,
        learning_curve=Difficulty.INTERMEDIATE,
        tags=["programming", "web", "types", "microsoft"],
    ),
    TechNodeData(
        label="React",
        category=TechCategory.FRAMEWORK,
        description="JavaScript library for building user interfaces",
        popularity=90,
        learning_curve=Difficulty.INTERMEDIATE,
        tags=["frontend", "ui", "facebook", "spa"],
    ),
    TechNodeData(
        label="Vue.js",
        category=TechCategory.FRAMEWORK,
        description="Progressive JavaScript framework",
        popularity=80,
        learning_curve=Difficulty.BEGINNER,
        tags=["frontend", "ui", "progressive", "spa"],
    ),
    TechNodeData(
        label="Angular",
        category=TechCategory.FRAMEWORK,
        description="Batteries-included frontend framework",
        popularity=70,
        learning_curve=Difficulty.ADVANCED,
        tags=["frontend", "ui", "google", "spa", "typescript"],
    ),
    # Backend
    TechNodeData(
        label="Node.js",
        category=TechCategory.PLATFORM,
        description="JavaScript runtime built on the V8 engine",
        popularity=85,
        learning_curve=Difficulty.INTERMEDIATE,
        tags=["backend", "javascript", "server", "runtime"],
    ),
    TechNodeData(
        label="Express.js",
        category=TechCategory.FRAMEWORK,
        description="Minimal web framework for Node.js",
        popularity=80,
        learning_curve=Difficulty.BEGINNER,
        tags=["backend", "web", "api", "nodejs"],
    ),
    TechNodeData(
        label="NestJS",
        category=TechCategory.FRAMEWORK,
        description="Framework for scalable server-side Node.js applications",
        popularity=60,
        learning_curve=Difficulty.ADVANCED,
        tags=["backend", "typescript", "decorators", "enterprise"],
    ),
    # Databases
    TechNodeData(
        label="MongoDB",
        category=TechCategory.DATABASE,
        description="Document-oriented NoSQL database",
        popularity=75,
        learning_curve=Difficulty.INTERMEDIATE,
        tags=["database", "nosql", "document", "json"],
    ),
    TechNodeData(
        label="PostgreSQL",
        category=TechCategory.DATABASE,
        description="Open-source relational database",
        popularity=80,
        learning_curve=Difficulty.INTERMEDIATE,
        tags=["database", "sql", "relational", "acid"],
    ),
    TechNodeData(
        label="Redis",
        category=TechCategory.DATABASE,
        description="In-memory data structure store",
        popularity=70,
        learning_curve=Difficulty.BEGINNER,
        tags=["database", "cache", "memory", "nosql"],
    ),
    # Tooling and platforms
    TechNodeData(
        label="Docker",
        category=TechCategory.TOOL,
        description="Container platform",
        popularity=85,
        learning_curve=Difficulty.INTERMEDIATE,
        tags=["devops", "container", "deployment"],
    ),
    TechNodeData(
        label="Kubernetes",
        category=TechCategory.PLATFORM,
        description="Container orchestration platform",
        popularity=75,
        learning_curve=Difficulty.ADVANCED,
        tags=["devops", "orchestration", "container", "google"],
    ),
    TechNodeData(
        label="Git",
        category=TechCategory.TOOL,
        description="Distributed version control system",
        popularity=95,
        learning_curve=Difficulty.BEGINNER,
        tags=["vcs", "collaboration", "development"],
    ),
]

# (from label, to label, relation)
DEFAULT_RELATIONSHIPS: list[tuple[str, str, RelationType]] = [
    ("TypeScript", "JavaScript", RelationType.EXTENDS),
    ("React", "JavaScript", RelationType.DEPENDS_ON),
    ("Vue.js", "JavaScript", RelationType.DEPENDS_ON),
    ("Angular", "TypeScript", RelationType.DEPENDS_ON),
    ("Express.js", "Node.js", RelationType.DEPENDS_ON),
    ("NestJS", "Node.js", RelationType.DEPENDS_ON),
    ("NestJS", "TypeScript", RelationType.DEPENDS_ON),
    ("Node.js", "JavaScript", RelationType.DEPENDS_ON),
    ("Kubernetes", "Docker", RelationType.DEPENDS_ON),
    ("React", "Vue.js", RelationType.ALTERNATIVE_TO),
    ("Vue.js", "Angular", RelationType.ALTERNATIVE_TO),
    ("MongoDB", "PostgreSQL", RelationType.ALTERNATIVE_TO),
    ("Express.js", "NestJS", RelationType.ALTERNATIVE_TO),
]


def seed_default_catalog(store: BaseTechGraphStore) -> dict[str, str]:
    """Register the default technologies and relations; returns label → id."""
    ids: dict[str, str] = {}
    for data in DEFAULT_TECHNOLOGIES:
        ids[data.label] = store.add_node(data.model_copy(deep=True))

    for from_label, to_label, rel_type in DEFAULT_RELATIONSHIPS:
        from_id = ids.get(from_label)
        to_id = ids.get(to_label)
        if from_id is None or to_id is None:
            logger.warning("Skipping relation %s -> %s: unknown label", from_label, to_label)
            continue
        store.add_edge(from_id, to_id, rel_type)

    logger.info(
        "Seeded default catalog: %d technologies, %d relations",
        len(ids),
        len(DEFAULT_RELATIONSHIPS),
    )
    return ids


def _resource(
    rid: str, rtype: ResourceType, title: str, url: str, difficulty: Difficulty, *tags: str
) -> LearningResource:
    return LearningResource(
        id=rid, type=rtype, title=title, url=url, difficulty=difficulty, tags=list(tags)
    )


def _lesson(
    node_id: str,
    title: str,
    description: str,
    hours: float,
    prerequisites: list[str],
    resources: list[LearningResource],
    order: int,
    difficulty: Difficulty = Difficulty.INTERMEDIATE,
    node_type: LearningNodeType = LearningNodeType.LESSON,
) -> LearningNode:
    return LearningNode(
        id=node_id,
        skill_id=node_id,
        title=title,
        description=description,
        type=node_type,
        estimated_hours=hours,
        difficulty=difficulty,
        prerequisites=prerequisites,
        resources=resources,
        order=order,
    )


def default_learning_paths() -> list[LearningPath]:
    """Authored paths shipped with the catalog; fresh objects on every call."""
    B, I, A = Difficulty.BEGINNER, Difficulty.INTERMEDIATE, Difficulty.ADVANCED
    V, R, E, P, T = (
        ResourceType.VIDEO,
        ResourceType.ARTICLE,
        ResourceType.EXERCISE,
        ResourceType.PROJECT,
        ResourceType.TUTORIAL,
    )

    react_fullstack = LearningPath(
        id="react-fullstack-path",
        title="React Full-Stack Development",
        description=(
            "Learn full-stack development with React from scratch: components, "
            "state management, Node.js back ends and database design"
        ),
        target_audience="junior to intermediate developers",
        estimated_duration=120,
        difficulty=I,
        nodes=[
            _lesson("react-basics", "React Basics", "Components, JSX, props and state", 15,
                    ["javascript-basics"],
                    [_resource("react-intro-video", V, "React introduction", "/resources/react-intro", B, "react", "basics"),
                     _resource("react-docs", R, "React documentation", "https://react.dev", B, "react", "documentation")],
                    1, B),
            _lesson("react-hooks", "React Hooks", "useState, useEffect and the other core hooks", 20,
                    ["react-basics"],
                    [_resource("hooks-practice", E, "Hooks practice", "/exercises/hooks-practice", I, "react", "hooks")],
                    2),
            _lesson("state-management", "State Management", "Redux, Zustand and friends", 25,
                    ["react-hooks"],
                    [_resource("shopping-cart-project", P, "Shopping cart state", "/projects/shopping-cart", I, "redux", "project")],
                    3),
            _lesson("nodejs-backend", "Node.js Back End", "RESTful APIs with Express.js", 30,
                    ["javascript-advanced"],
                    [_resource("express-tutorial", V, "Express.js tutorial", "/resources/express-tutorial", I, "nodejs", "express")],
                    4),
            _lesson("database-design", "Database Design", "Schema design with MongoDB and PostgreSQL", 20,
                    ["nodejs-backend"],
                    [_resource("db-design-article", R, "Database design practices", "/resources/db-design", I, "database", "design")],
                    5),
            _lesson("fullstack-project", "Full-Stack Project", "Build a complete full-stack application", 40,
                    ["state-management", "database-design"],
                    [_resource("deployment-guide", T, "Deployment guide", "/guides/deployment", I, "deployment", "guide")],
                    6, A, LearningNodeType.PROJECT),
        ],
        prerequisites=["JavaScript fundamentals", "HTML/CSS"],
        outcomes=["React development", "Node.js back ends", "Full-stack architecture", "Deployment"],
        created_by="Tech Team",
        created_at="2024-01-01T00:00:00+00:00",
        updated_at="2024-12-20T00:00:00+00:00",
        tags=["react", "fullstack", "javascript", "nodejs", "database"],
    )

    vue_modern = LearningPath(
        id="vue-modern-dev",
        title="Modern Vue.js Development",
        description="Vue 3 and its ecosystem: Composition API, Pinia and Vue Router",
        target_audience="intermediate developers",
        estimated_duration=80,
        difficulty=I,
        nodes=[
            _lesson("vue3-basics", "Vue 3 Basics", "Core concepts and template syntax", 12,
                    ["javascript-basics"],
                    [_resource("vue3-docs", R, "Vue 3 guide", "https://vuejs.org", B, "vue", "documentation")],
                    1, B),
            _lesson("composition-api", "Composition API", "Reactive state with the Composition API", 18,
                    ["vue3-basics"], [], 2),
            _lesson("vue-router", "Vue Router", "Client-side routing with Vue Router 4", 15,
                    ["composition-api"], [], 3),
            _lesson("pinia-state", "Pinia", "State management with Pinia", 20,
                    ["vue-router"], [], 4),
            _lesson("vue-ecosystem", "Vue Ecosystem", "Vite, Vitest and Vue DevTools", 15,
                    ["pinia-state"], [], 5),
        ],
        prerequisites=["Advanced JavaScript", "ES2015+ syntax"],
        outcomes=["Vue 3 development", "Single-page applications", "Modern frontend tooling"],
        created_by="Vue Team",
        created_at="2024-01-15T00:00:00+00:00",
        updated_at="2024-12-18T00:00:00+00:00",
        tags=["vue", "frontend", "spa", "composition-api", "pinia"],
    )

    python_ai = LearningPath(
        id="python-ai-path",
        title="Python AI Development",
        description="From Python basics to machine learning and deep learning",
        target_audience="junior to senior developers",
        estimated_duration=150,
        difficulty=A,
        nodes=[
            _lesson("python-basics", "Python Basics", "Syntax, data structures and OOP", 25, [],
                    [_resource("python-practice", E, "Python exercises", "/exercises/python-practice", B, "python", "exercise")],
                    1, B),
            _lesson("numpy-pandas", "NumPy & pandas", "Core data-processing libraries", 20,
                    ["python-basics"], [], 2),
            _lesson("machine-learning", "Machine Learning", "scikit-learn and classic algorithms", 35,
                    ["numpy-pandas"], [], 3),
            _lesson("deep-learning", "Deep Learning", "Neural networks with PyTorch or TensorFlow", 40,
                    ["machine-learning"], [], 4, A),
            _lesson("ai-deployment", "Model Deployment", "Serving and optimising models in production", 30,
                    ["deep-learning"], [], 5, A),
        ],
        prerequisites=["Mathematics", "Statistics"],
        outcomes=["Python programming", "Data science", "Machine learning", "AI applications"],
        created_by="AI Team",
        created_at="2024-02-01T00:00:00+00:00",
        updated_at="2024-12-15T00:00:00+00:00",
        tags=["python", "ai", "machine-learning", "data-science", "tensorflow"],
    )

    devops = LearningPath(
        id="devops-path",
        title="DevOps Engineer",
        description="Containers, CI/CD, monitoring and cloud platforms",
        target_audience="intermediate to senior developers",
        estimated_duration=100,
        difficulty=A,
        nodes=[
            _lesson("linux-basics", "Linux Administration", "Command line and system administration", 20, [],
                    [], 1),
            _lesson("docker-containers", "Docker", "Containerising applications", 25,
                    ["linux-basics"], [], 2),
            _lesson("kubernetes", "Kubernetes", "Container orchestration", 30,
                    ["docker-containers"], [], 3, A),
            _lesson("cicd-pipeline", "CI/CD Pipelines", "Automated build and deployment pipelines", 25,
                    ["kubernetes"], [], 4, A),
        ],
        prerequisites=["Programming fundamentals", "Networking fundamentals"],
        outcomes=["Operations", "Container deployment", "CI/CD automation", "Cloud platforms"],
        created_by="DevOps Team",
        created_at="2024-03-01T00:00:00+00:00",
        updated_at="2024-12-10T00:00:00+00:00",
        tags=["devops", "docker", "kubernetes", "cicd", "linux"],
    )

    return [react_fullstack, vue_modern, python_ai, devops]
