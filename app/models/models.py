import uuid
from datetime import datetime
from sqlalchemy import Column, String, Integer, Boolean, Text, DateTime, Numeric, JSON
from app.models.base import Base
import enum

__all__ = [
    "UserRole", "User", "EmployeeStatus", "Employee", "ProjectStatus", "Project",
    "TaskStatus", "TaskPriority", "Task", "KPI", "TransactionType", "Transaction",
    "PayrollStatus", "PayrollRecord", "ProposalStatus", "Proposal",
    "EvaluationType", "Evaluation", "ReportStatus", "Report", "AssetStatus", "Asset",
    "gen_uuid",
]


class UserRole(str, enum.Enum):
    USER = "user"
    MANAGER = "manager"
    ADMINISTRATOR = "administrator"


class EmployeeStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class ProjectStatus(str, enum.Enum):
    PLANNING = "planning"
    ACTIVE = "active"
    ON_HOLD = "on_hold"
    COMPLETED = "completed"
    ARCHIVED = "archived"
    CANCELLED = "cancelled"


class TaskStatus(str, enum.Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class TaskPriority(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TransactionType(str, enum.Enum):
    INCOME = "income"
    EXPENSE = "expense"


class PayrollStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    PAID = "paid"


class ProposalStatus(str, enum.Enum):
    DRAFT = "draft"
    SUBMITTED = "submitted"
    UNDER_REVIEW = "under_review"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class EvaluationType(str, enum.Enum):
    BASELINE = "baseline"
    MIDTERM = "midterm"
    FINAL = "final"


class ReportStatus(str, enum.Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class AssetStatus(str, enum.Enum):
    ACTIVE = "active"
    MAINTENANCE = "maintenance"
    RETIRED = "retired"


def gen_uuid():
    return str(uuid.uuid4())


# Reference columns (manager_id, assignee_id, project_id, ...) are plain strings:
# the store tolerates dangling references, so no foreign keys are declared.

class User(Base):
    __tablename__ = "users"

    id = Column(String(64), primary_key=True, default=gen_uuid)
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default=UserRole.USER.value)
    permissions = Column(JSON, nullable=False, default=list)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)


class Employee(Base):
    __tablename__ = "employees"

    id = Column(String(64), primary_key=True, default=gen_uuid)
    employee_id = Column(String(64), unique=True, nullable=False)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    phone = Column(String(64), nullable=True)
    position = Column(String(255), nullable=False)
    department = Column(String(255), nullable=False)
    hire_date = Column(DateTime, nullable=False)
    salary = Column(Numeric(14, 2), nullable=True)
    status = Column(String(32), nullable=False, default=EmployeeStatus.ACTIVE.value)
    manager_id = Column(String(64), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}"


class Project(Base):
    __tablename__ = "projects"

    id = Column(String(64), primary_key=True, default=gen_uuid)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    client = Column(String(255), nullable=False)
    status = Column(String(32), nullable=False, default=ProjectStatus.ACTIVE.value)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=True)
    budget = Column(Numeric(14, 2), nullable=True)
    progress = Column(Integer, default=0)
    manager_id = Column(String(64), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)


class Task(Base):
    __tablename__ = "tasks"

    id = Column(String(64), primary_key=True, default=gen_uuid)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(32), nullable=False, default=TaskStatus.PENDING.value)
    priority = Column(String(32), nullable=False, default=TaskPriority.MEDIUM.value)
    assignee_id = Column(String(64), nullable=True, index=True)
    project_id = Column(String(64), nullable=True, index=True)
    due_date = Column(DateTime, nullable=True)
    completed_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)


class KPI(Base):
    __tablename__ = "kpis"

    id = Column(String(64), primary_key=True, default=gen_uuid)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String(255), nullable=False)
    target_value = Column(Numeric(14, 2), nullable=True)
    current_value = Column(Numeric(14, 2), nullable=True)
    unit = Column(String(64), nullable=True)
    period = Column(String(64), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)


class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(String(64), primary_key=True, default=gen_uuid)
    type = Column(String(16), nullable=False)
    amount = Column(Numeric(14, 2), nullable=False)
    description = Column(Text, nullable=False)
    category = Column(String(255), nullable=False)
    project_id = Column(String(64), nullable=True, index=True)
    date = Column(DateTime, nullable=False)
    created_by = Column(String(64), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)


class PayrollRecord(Base):
    __tablename__ = "payroll_records"

    id = Column(String(64), primary_key=True, default=gen_uuid)
    employee_id = Column(String(64), nullable=False, index=True)
    period = Column(String(7), nullable=False)
    base_salary = Column(Numeric(14, 2), nullable=False)
    allowances = Column(Numeric(14, 2), default=0)
    deductions = Column(Numeric(14, 2), default=0)
    net_pay = Column(Numeric(14, 2), nullable=False)
    status = Column(String(32), nullable=False, default=PayrollStatus.PENDING.value)
    approved_by = Column(String(64), nullable=True)
    approved_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)


class Proposal(Base):
    __tablename__ = "proposals"

    id = Column(String(64), primary_key=True, default=gen_uuid)
    title = Column(String(255), nullable=False)
    client = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    value = Column(Numeric(14, 2), nullable=True)
    status = Column(String(32), nullable=False, default=ProposalStatus.DRAFT.value)
    submission_date = Column(DateTime, nullable=True)
    deadline_date = Column(DateTime, nullable=True)
    lead_id = Column(String(64), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)


class Evaluation(Base):
    __tablename__ = "evaluations"

    id = Column(String(64), primary_key=True, default=gen_uuid)
    project_id = Column(String(64), nullable=False, index=True)
    evaluation_type = Column(String(32), nullable=False)
    evaluation_date = Column(DateTime, nullable=False)
    findings = Column(Text, nullable=True)
    recommendations = Column(Text, nullable=True)
    score = Column(Integer, nullable=True)
    evaluator_id = Column(String(64), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)


class Report(Base):
    __tablename__ = "reports"

    id = Column(String(64), primary_key=True, default=gen_uuid)
    name = Column(String(255), nullable=False)
    type = Column(String(64), nullable=False)
    description = Column(Text, nullable=True)
    generated_at = Column(DateTime, default=datetime.utcnow)
    status = Column(String(32), nullable=False, default=ReportStatus.PENDING.value)
    file_path = Column(String(512), nullable=True)
    created_by = Column(String(64), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)


class Asset(Base):
    __tablename__ = "assets"

    id = Column(String(64), primary_key=True, default=gen_uuid)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String(255), nullable=False)
    serial_number = Column(String(255), unique=True, nullable=True)
    purchase_date = Column(DateTime, nullable=True)
    purchase_value = Column(Numeric(14, 2), nullable=True)
    current_value = Column(Numeric(14, 2), nullable=True)
    status = Column(String(32), nullable=False, default=AssetStatus.ACTIVE.value)
    assigned_to = Column(String(64), nullable=True, index=True)
    location = Column(String(255), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)
