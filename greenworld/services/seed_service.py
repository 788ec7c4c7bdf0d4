"""Demo data for local development. Run with: greenworld seed"""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from greenworld.core.security import hash_password
from greenworld.db.enums import ImpactType, ProjectStatus, Role
from greenworld.db.models import Certificate, Milestone, Project, Registration, User

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password123"

DEMO_USERS = [
    {"key": "admin", "email": "admin@greenworld.org", "name": "System Admin", "role": Role.ADMIN},
    {
        "key": "green_earth", "email": "contact@greenearthsociety.org", "name": "Green Earth Society",
        "role": Role.NGO, "organization_name": "Green Earth Society",
    },
    {
        "key": "ocean_guardians", "email": "info@oceanians.org", "name": "Ocean Guardians",
        "role": Role.NGO, "organization_name": "Ocean Guardians",
    },
    {"key": "volunteer", "email": "volunteer@example.com", "name": "John Doe", "role": Role.VOLUNTEER},
    {
        "key": "corporate", "email": "csr@techcorp.com", "name": "TechCorp CSR Team",
        "role": Role.CORPORATE, "organization_name": "TechCorp Inc.",
    },
]

DEMO_PROJECTS = [
    {
        "key": "urban_forest",
        "owner": "green_earth",
        "title": "Urban Forest Initiative",
        "description": "A large-scale project restoring the urban canopy with native species like Neem, Peepal and Banyan to improve local air quality.",
        "long_description": "Transformed a 2-acre abandoned industrial plot into a thriving urban forest that now reduces the local heat island effect.",
        "location": "Mumbai, India",
        "funding_goal": 50000,
        "funding_received": 35000,
        "status": ProjectStatus.ACTIVE,
        "impact_type": ImpactType.TREES,
        "impact_value": "5,000 trees",
        "carbon_offset": "3.2 tons/year",
        "image": "🌳",
        "milestones": [
            ("Site Preparation", True),
            ("Community Education", True),
            ("Mass Planting", False),
            ("Initial Irrigation", False),
        ],
    },
    {
        "key": "coastal_cleanup",
        "owner": "ocean_guardians",
        "title": "Coastal Cleanup Drive",
        "description": "Remove plastic and waste from coastal areas to protect marine ecosystems and wildlife.",
        "long_description": "Mobilized youth volunteers to clear plastic along the Goa coastline; all waste goes to a partner recycling facility.",
        "location": "Goa, India",
        "funding_goal": 30000,
        "funding_received": 18000,
        "status": ProjectStatus.ACTIVE,
        "impact_type": ImpactType.WASTE,
        "impact_value": "5 tons waste",
        "carbon_offset": "0.8 tons/year",
        "image": "🌊",
        "milestones": [
            ("Area Scouting", True),
            ("Equipment Distribution", True),
            ("Collection Phase", False),
            ("Sorting & Recycling", False),
        ],
    },
    {
        "key": "mangroves",
        "owner": "green_earth",
        "title": "Mangrove Restoration",
        "description": "Restore and protect 2,000 hectares of mangrove forests crucial for coastal biodiversity.",
        "long_description": "Restoring degraded mangrove ecosystems along the Kerala coast together with local fishing communities.",
        "location": "Kerala, India",
        "funding_goal": 45000,
        "funding_received": 45000,
        "status": ProjectStatus.COMPLETED,
        "impact_type": ImpactType.TREES,
        "impact_value": "2,000 hectares",
        "carbon_offset": "15 tons/year",
        "image": "🌿",
        "milestones": [
            ("Initial Survey", True),
            ("Site Preparation", True),
            ("Planting Phase", True),
            ("Monitoring", True),
        ],
    },
    {
        "key": "water_harvesting",
        "owner": "ocean_guardians",
        "title": "Water Harvesting System",
        "description": "Install rainwater harvesting systems in 50 rural villages to provide sustainable water access.",
        "long_description": None,
        "location": "Rajasthan, India",
        "funding_goal": 60000,
        "funding_received": 40000,
        "status": ProjectStatus.ACTIVE,
        "impact_type": ImpactType.WATER,
        "impact_value": "2.1M liters",
        "carbon_offset": None,
        "image": "💧",
        "milestones": [],
    },
]

# (volunteer key, project key, hours, certificate issued)
DEMO_REGISTRATIONS = [
    ("volunteer", "urban_forest", 12, False),
    ("volunteer", "mangroves", 8, True),
]


def seed_demo_data(db: Session) -> bool:
    """
    Insert demo accounts, projects, milestones, registrations and a certificate.

    Skipped when any user exists. Returns True if data was inserted.
    Caller commits.
    """
    if db.scalar(select(User.id).limit(1)) is not None:
        logger.info("Database already seeded, skipping")
        return False

    password_hash = hash_password(DEMO_PASSWORD)
    users: dict[str, User] = {}
    for demo in DEMO_USERS:
        user = User(
            email=demo["email"],
            password_hash=password_hash,
            name=demo["name"],
            role=demo["role"].value,
            organization_name=demo.get("organization_name"),
        )
        db.add(user)
        users[demo["key"]] = user
    db.flush()

    projects: dict[str, Project] = {}
    for demo in DEMO_PROJECTS:
        project = Project(
            title=demo["title"],
            description=demo["description"],
            long_description=demo["long_description"],
            location=demo["location"],
            funding_goal=demo["funding_goal"],
            funding_received=demo["funding_received"],
            status=demo["status"].value,
            impact_type=demo["impact_type"].value,
            impact_value=demo["impact_value"],
            carbon_offset=demo["carbon_offset"],
            image=demo["image"],
            ngo_id=users[demo["owner"]].id,
        )
        for index, (name, completed) in enumerate(demo["milestones"]):
            project.milestones.append(Milestone(name=name, completed=completed, order_index=index))
        db.add(project)
        projects[demo["key"]] = project
    db.flush()

    for user_key, project_key, hours, certified in DEMO_REGISTRATIONS:
        user = users[user_key]
        project = projects[project_key]
        db.add(Registration(user_id=user.id, project_id=project.id, hours_contributed=hours))
        if certified:
            db.add(Certificate(user_id=user.id, project_id=project.id, hours=hours))
    db.flush()

    logger.info(
        "Seeded %d users, %d projects, %d registrations",
        len(users), len(projects), len(DEMO_REGISTRATIONS),
    )
    return True
