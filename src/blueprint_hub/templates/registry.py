"""Curated template registry.

Static, read-mostly metadata for the hand-made templates in the gallery.
Used to seed the blueprint cache and to resolve admin batch builds.
"""

from blueprint_hub.errors import TemplateNotFoundError
from blueprint_hub.models.template import TemplateMetadata

CURATED_TEMPLATES: list[TemplateMetadata] = [
    # Productivity
    TemplateMetadata(
        id="habit-tracker",
        name="Habit Tracker",
        description="Build lasting habits with daily check-ins and streaks.",
        category="Productivity",
        icon="✅",
        tags=["habits", "daily", "routine", "streak"],
    ),
    TemplateMetadata(
        id="project-tracker",
        name="Project Tracker",
        description="Plan projects, assign tasks and follow progress on a kanban board.",
        category="Productivity",
        icon="\U0001f4cb",
        tags=["projects", "tasks", "kanban"],
    ),
    TemplateMetadata(
        id="goal-tracker",
        name="Goal Tracker",
        description="Set goals, break them into milestones and review progress.",
        category="Productivity",
        icon="\U0001f3af",
        tags=["goals", "okr", "milestone"],
    ),
    TemplateMetadata(
        id="daily-planner",
        name="Daily Planner",
        description="Plan your day with time blocks, priorities and a short review.",
        category="Productivity",
        icon="\U0001f5d3️",
        tags=["planner", "schedule", "daily"],
    ),
    TemplateMetadata(
        id="meeting-notes",
        name="Meeting Notes",
        description="Capture agendas, decisions and action items for every meeting.",
        category="Productivity",
        icon="\U0001f4dd",
        tags=["meetings", "agenda", "notes"],
    ),
    # Finance
    TemplateMetadata(
        id="budget-tracker",
        name="Budget Tracker",
        description="Track income and expenses against a monthly budget.",
        category="Finance",
        icon="\U0001f4b0",
        tags=["budget", "money", "finance"],
    ),
    TemplateMetadata(
        id="expense-tracker",
        name="Expense Tracker",
        description="Log every expense and see where your money goes.",
        category="Finance",
        icon="\U0001f4b8",
        tags=["expenses", "spending", "money"],
    ),
    TemplateMetadata(
        id="investment-tracker",
        name="Investment Tracker",
        description="Follow holdings, contributions and returns across accounts.",
        category="Finance",
        icon="\U0001f4c8",
        tags=["investments", "portfolio", "stock"],
        is_pro=True,
        price=9.0,
    ),
    # Health & Fitness
    TemplateMetadata(
        id="workout-tracker",
        name="Workout Tracker",
        description="Plan workouts and log sets, reps and personal records.",
        category="Health & Fitness",
        icon="\U0001f4aa",
        tags=["workout", "gym", "fitness"],
    ),
    TemplateMetadata(
        id="meal-planner",
        name="Meal Planner",
        description="Plan weekly meals, store recipes and build shopping lists.",
        category="Health & Fitness",
        icon="\U0001f957",
        tags=["meals", "recipes", "nutrition"],
    ),
    TemplateMetadata(
        id="weight-tracker",
        name="Weight Tracker",
        description="Record weight and body measurements over time.",
        category="Health & Fitness",
        icon="⚖️",
        tags=["fitness", "health", "weight"],
    ),
    # Content Creation
    TemplateMetadata(
        id="content-calendar",
        name="Content Calendar",
        description="Plan, draft and publish content across every channel.",
        category="Content Creation",
        icon="\U0001f4c5",
        tags=["content", "editorial", "social media"],
        is_pro=True,
        price=12.0,
    ),
    TemplateMetadata(
        id="blog-manager",
        name="Blog Manager",
        description="Move blog posts from idea to published with a clear pipeline.",
        category="Content Creation",
        icon="✍️",
        tags=["blog", "articles", "writing"],
    ),
    # Business
    TemplateMetadata(
        id="crm",
        name="Simple CRM",
        description="Manage clients, leads and your sales pipeline.",
        category="Business",
        icon="\U0001f91d",
        tags=["crm", "clients", "sales", "leads"],
        is_pro=True,
        price=15.0,
    ),
    TemplateMetadata(
        id="inventory-tracker",
        name="Inventory Tracker",
        description="Keep stock levels, suppliers and reorders in one place.",
        category="Business",
        icon="\U0001f4e6",
        tags=["inventory", "stock", "warehouse"],
    ),
    # Education
    TemplateMetadata(
        id="study-planner",
        name="Study Planner",
        description="Organize courses, assignments and exam preparation.",
        category="Education",
        icon="\U0001f393",
        tags=["study", "courses", "learning"],
    ),
    TemplateMetadata(
        id="book-tracker",
        name="Book Tracker",
        description="Keep a reading list, track progress and save highlights.",
        category="Education",
        icon="\U0001f4da",
        tags=["books", "reading", "library"],
    ),
    # Travel
    TemplateMetadata(
        id="travel-planner",
        name="Travel Planner",
        description="Plan trips with itineraries, budgets and packing lists.",
        category="Travel",
        icon="✈️",
        tags=["travel", "trips", "itinerary"],
    ),
    # Personal
    TemplateMetadata(
        id="journal",
        name="Daily Journal",
        description="Reflect every day with prompts for gratitude and mood.",
        category="Personal",
        icon="\U0001f4d4",
        tags=["journal", "gratitude", "reflection"],
    ),
]


class TemplateRegistry:
    """Read-only lookup over a list of curated templates."""

    def __init__(self, templates: list[TemplateMetadata] | None = None) -> None:
        self._templates = list(CURATED_TEMPLATES if templates is None else templates)
        self._by_id = {t.id: t for t in self._templates}

    def all(self) -> list[TemplateMetadata]:
        return list(self._templates)

    def get(self, template_id: str) -> TemplateMetadata | None:
        return self._by_id.get(template_id)

    def find_by_id(self, template_id: str) -> TemplateMetadata:
        """Return the template or raise TemplateNotFoundError."""
        template = self._by_id.get(template_id)
        if template is None:
            raise TemplateNotFoundError(f"Template not found: {template_id}")
        return template

    def by_category(self, category: str) -> list[TemplateMetadata]:
        if category.lower() == "all":
            return self.all()
        return [t for t in self._templates if t.category.lower() == category.lower()]
