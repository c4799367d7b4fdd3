import logging
from datetime import datetime
from decimal import Decimal
from app.core.auth import hash_password

logger = logging.getLogger(__name__)


def seed_store(store, admin_password: str = "admin123"):
    """Load the GSI fixture records into an empty store."""
    if store.users.count() > 0:
        return

    store.users.create({
        "email": "admin@governancesystemsint.com",
        "hashed_password": hash_password(admin_password),
        "first_name": "John",
        "last_name": "Doe",
        "role": "administrator",
        "permissions": ["read", "write", "admin"],
        "is_active": True,
    }, record_id="admin-1")

    employees = [
        ("emp-1", {
            "employee_id": "GSI001",
            "first_name": "Jane",
            "last_name": "Smith",
            "email": "jane.smith@governancesystemsint.com",
            "phone": "+256757578580",
            "position": "Project Manager",
            "department": "Operations",
            "hire_date": datetime(2023, 1, 15),
            "salary": Decimal("75000.00"),
            "status": "active",
            "manager_id": None,
        }),
        ("emp-2", {
            "employee_id": "GSI002",
            "first_name": "Mark",
            "last_name": "Johnson",
            "email": "mark.johnson@governancesystemsint.com",
            "phone": "+256757578581",
            "position": "Senior Consultant",
            "department": "Consulting",
            "hire_date": datetime(2022, 3, 1),
            "salary": Decimal("85000.00"),
            "status": "active",
            "manager_id": "emp-1",
        }),
    ]
    for record_id, fields in employees:
        store.employees.create(fields, record_id=record_id)

    projects = [
        ("proj-1", {
            "name": "USAID Uganda Feed the Future, Inclusive Agricultural Markets Activity",
            "description": "Supporting agricultural market development in Uganda",
            "client": "USAID",
            "status": "active",
            "start_date": datetime(2024, 1, 15),
            "end_date": datetime(2024, 12, 31),
            "budget": Decimal("500000.00"),
            "progress": 85,
            "manager_id": "emp-1",
        }),
        ("proj-2", {
            "name": "Water Reservoir Development - Karamoja",
            "description": "Facilitating Free Prior and Informed Consent for water reservoirs",
            "client": "Ministry of Water and Environment",
            "status": "active",
            "start_date": datetime(2024, 2, 1),
            "end_date": datetime(2024, 8, 15),
            "budget": Decimal("300000.00"),
            "progress": 62,
            "manager_id": "emp-2",
        }),
    ]
    for record_id, fields in projects:
        store.projects.create(fields, record_id=record_id)

    tasks = [
        ("task-1", {
            "title": "Project proposal review",
            "description": "Review AfDB water project proposal",
            "status": "in_progress",
            "priority": "high",
            "assignee_id": "emp-1",
            "project_id": "proj-2",
            "due_date": datetime(2024, 3, 15),
            "completed_at": None,
        }),
        ("task-2", {
            "title": "Staff training coordination",
            "description": "Quarterly skills development training",
            "status": "completed",
            "priority": "medium",
            "assignee_id": "emp-2",
            "project_id": None,
            "due_date": datetime(2024, 3, 12),
            "completed_at": datetime(2024, 3, 10),
        }),
    ]
    for record_id, fields in tasks:
        store.tasks.create(fields, record_id=record_id)

    logger.info("Seeded store with fixture records")
