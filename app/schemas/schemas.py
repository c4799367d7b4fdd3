from pydantic import BaseModel, EmailStr, Field, AfterValidator, TypeAdapter, ValidationError, model_validator
from pydantic.alias_generators import to_camel
from datetime import datetime, timezone
from decimal import Decimal
from typing import Annotated, ClassVar, Literal, Optional
from app.models.models import (
    UserRole, EmployeeStatus, ProjectStatus, TaskStatus, TaskPriority, TransactionType,
    PayrollStatus, ProposalStatus, EvaluationType, AssetStatus
)


def _naive_utc(value: datetime) -> datetime:
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


Timestamp = Annotated[datetime, AfterValidator(_naive_utc)]
Money = Annotated[Decimal, Field(max_digits=14, decimal_places=2)]
PositiveMoney = Annotated[Decimal, Field(max_digits=14, decimal_places=2, gt=0)]
Text = Annotated[str, Field(min_length=1)]
Percent = Annotated[int, Field(ge=0, le=100)]

_email_adapter = TypeAdapter(EmailStr)


def normalize_email(value: str) -> str:
    """Apply the same normalisation EmailStr does on write; unparseable input is left as is."""
    try:
        return _email_adapter.validate_python(value)
    except ValidationError:
        return value


LoginEmail = Annotated[str, Field(min_length=1), AfterValidator(normalize_email)]

REPORT_TYPES = {
    "employee-performance": "Employee Performance Report",
    "financial-summary": "Financial Summary Report",
    "project-progress": "Project Progress Report",
    "task-completion": "Task Completion Report",
    "kpi-analysis": "KPI Analysis Report",
}

ReportType = Literal[
    "employee-performance", "financial-summary", "project-progress",
    "task-completion", "kpi-analysis",
]


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase on the wire."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
        use_enum_values = True
        validate_default = True


class PartialUpdate(CamelModel):
    """Every field optional; columns in ``not_null`` may be omitted but not cleared."""

    not_null: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="before")
    @classmethod
    def reject_cleared_required_fields(cls, data):
        if isinstance(data, dict):
            for name in cls.not_null:
                alias = to_camel(name)
                if (name in data and data[name] is None) or (alias in data and data[alias] is None):
                    raise ValueError(f"{alias} cannot be null")
        return data


# Auth & users

class LoginRequest(CamelModel):
    email: LoginEmail
    password: Text


class UserCreate(CamelModel):
    email: EmailStr
    password: Text
    first_name: Text
    last_name: Text
    role: UserRole = UserRole.USER
    permissions: list[str] = Field(default_factory=list)
    is_active: bool = True


class RegisterRequest(CamelModel):
    email: EmailStr
    password: Text
    first_name: Text
    last_name: Text


class UserUpdate(PartialUpdate):
    not_null: ClassVar[tuple[str, ...]] = ("email", "password", "first_name", "last_name", "role", "permissions", "is_active")

    email: Optional[EmailStr] = None
    password: Optional[Text] = None
    first_name: Optional[Text] = None
    last_name: Optional[Text] = None
    role: Optional[UserRole] = None
    permissions: Optional[list[str]] = None
    is_active: Optional[bool] = None


class UserResponse(CamelModel):
    id: str
    email: str
    first_name: str
    last_name: str
    role: str
    permissions: list[str] = []
    is_active: bool
    created_at: datetime
    updated_at: datetime


class LoginResponse(CamelModel):
    user: UserResponse
    token: str
    token_type: str = "bearer"


# Employees

class EmployeeCreate(CamelModel):
    employee_id: Text
    first_name: Text
    last_name: Text
    email: EmailStr
    phone: Optional[str] = None
    position: Text
    department: Text
    hire_date: Timestamp
    salary: Optional[Money] = None
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    manager_id: Optional[str] = None


class EmployeeUpdate(PartialUpdate):
    not_null: ClassVar[tuple[str, ...]] = (
        "employee_id", "first_name", "last_name", "email", "position", "department", "hire_date", "status",
    )

    employee_id: Optional[Text] = None
    first_name: Optional[Text] = None
    last_name: Optional[Text] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    position: Optional[Text] = None
    department: Optional[Text] = None
    hire_date: Optional[Timestamp] = None
    salary: Optional[Money] = None
    status: Optional[EmployeeStatus] = None
    manager_id: Optional[str] = None


class EmployeeResponse(CamelModel):
    id: str
    employee_id: str
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    position: str
    department: str
    hire_date: datetime
    salary: Optional[Decimal] = None
    status: str
    manager_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime


# Projects

class ProjectCreate(CamelModel):
    name: Text
    description: Optional[str] = None
    client: Text
    status: ProjectStatus = ProjectStatus.ACTIVE
    start_date: Timestamp
    end_date: Optional[Timestamp] = None
    budget: Optional[Money] = None
    progress: Percent = 0
    manager_id: Optional[str] = None


class ProjectUpdate(PartialUpdate):
    not_null: ClassVar[tuple[str, ...]] = ("name", "client", "status", "start_date")

    name: Optional[Text] = None
    description: Optional[str] = None
    client: Optional[Text] = None
    status: Optional[ProjectStatus] = None
    start_date: Optional[Timestamp] = None
    end_date: Optional[Timestamp] = None
    budget: Optional[Money] = None
    progress: Optional[Percent] = None
    manager_id: Optional[str] = None


class ProjectResponse(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    client: str
    status: str
    start_date: datetime
    end_date: Optional[datetime] = None
    budget: Optional[Decimal] = None
    progress: Optional[int] = 0
    manager_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime


# Tasks

class TaskCreate(CamelModel):
    title: Text
    description: Optional[str] = None
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    assignee_id: Optional[str] = None
    project_id: Optional[str] = None
    due_date: Optional[Timestamp] = None
    completed_at: Optional[Timestamp] = None


class TaskUpdate(PartialUpdate):
    not_null: ClassVar[tuple[str, ...]] = ("title", "status", "priority")

    title: Optional[Text] = None
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    assignee_id: Optional[str] = None
    project_id: Optional[str] = None
    due_date: Optional[Timestamp] = None
    completed_at: Optional[Timestamp] = None


class TaskResponse(CamelModel):
    id: str
    title: str
    description: Optional[str] = None
    status: str
    priority: str
    assignee_id: Optional[str] = None
    project_id: Optional[str] = None
    due_date: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


# KPIs

class KPICreate(CamelModel):
    name: Text
    description: Optional[str] = None
    category: Text
    target_value: Optional[Money] = None
    current_value: Optional[Money] = None
    unit: Optional[str] = None
    period: Text


class KPIUpdate(PartialUpdate):
    not_null: ClassVar[tuple[str, ...]] = ("name", "category", "period")

    name: Optional[Text] = None
    description: Optional[str] = None
    category: Optional[Text] = None
    target_value: Optional[Money] = None
    current_value: Optional[Money] = None
    unit: Optional[str] = None
    period: Optional[Text] = None


class KPIResponse(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    category: str
    target_value: Optional[Decimal] = None
    current_value: Optional[Decimal] = None
    unit: Optional[str] = None
    period: str
    progress: float = 0.0
    created_at: datetime
    updated_at: datetime


class KPIProgress(CamelModel):
    id: str
    progress: float


# Finance

class TransactionCreate(CamelModel):
    type: TransactionType
    amount: PositiveMoney
    description: Text
    category: Text
    project_id: Optional[str] = None
    date: Timestamp
    created_by: Optional[str] = None


class TransactionUpdate(PartialUpdate):
    not_null: ClassVar[tuple[str, ...]] = ("type", "amount", "description", "category", "date")

    type: Optional[TransactionType] = None
    amount: Optional[PositiveMoney] = None
    description: Optional[Text] = None
    category: Optional[Text] = None
    project_id: Optional[str] = None
    date: Optional[Timestamp] = None
    created_by: Optional[str] = None


class TransactionResponse(CamelModel):
    id: str
    type: str
    amount: Decimal
    description: str
    category: str
    project_id: Optional[str] = None
    date: datetime
    created_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class FinanceTotals(CamelModel):
    total_income: float
    total_expenses: float
    net_balance: float


# Payroll

class PayrollCreate(CamelModel):
    employee_id: Text
    period: Annotated[str, Field(pattern=r"^\d{4}-(0[1-9]|1[0-2])$")]
    base_salary: Annotated[Decimal, Field(max_digits=14, decimal_places=2, ge=0)]
    allowances: Money = Decimal("0")
    deductions: Money = Decimal("0")
    status: PayrollStatus = PayrollStatus.PENDING
    approved_by: Optional[str] = None


class PayrollUpdate(PartialUpdate):
    not_null: ClassVar[tuple[str, ...]] = ("employee_id", "period", "base_salary", "net_pay", "status")

    employee_id: Optional[Text] = None
    period: Optional[Annotated[str, Field(pattern=r"^\d{4}-(0[1-9]|1[0-2])$")]] = None
    base_salary: Optional[Annotated[Decimal, Field(max_digits=14, decimal_places=2, ge=0)]] = None
    allowances: Optional[Money] = None
    deductions: Optional[Money] = None
    net_pay: Optional[Money] = None
    status: Optional[PayrollStatus] = None
    approved_by: Optional[str] = None


class PayrollResponse(CamelModel):
    id: str
    employee_id: str
    period: str
    base_salary: Decimal
    allowances: Optional[Decimal] = None
    deductions: Optional[Decimal] = None
    net_pay: Decimal
    status: str
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class PayrollTotals(CamelModel):
    pending: float
    approved: float
    paid: float
    total: float
    record_count: int


# Proposals

class ProposalCreate(CamelModel):
    title: Text
    client: Text
    description: Optional[str] = None
    value: Optional[Money] = None
    status: ProposalStatus = ProposalStatus.DRAFT
    submission_date: Optional[Timestamp] = None
    deadline_date: Optional[Timestamp] = None
    lead_id: Optional[str] = None


class ProposalUpdate(PartialUpdate):
    not_null: ClassVar[tuple[str, ...]] = ("title", "client", "status")

    title: Optional[Text] = None
    client: Optional[Text] = None
    description: Optional[str] = None
    value: Optional[Money] = None
    status: Optional[ProposalStatus] = None
    submission_date: Optional[Timestamp] = None
    deadline_date: Optional[Timestamp] = None
    lead_id: Optional[str] = None


class ProposalResponse(CamelModel):
    id: str
    title: str
    client: str
    description: Optional[str] = None
    value: Optional[Decimal] = None
    status: str
    submission_date: Optional[datetime] = None
    deadline_date: Optional[datetime] = None
    lead_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime


# Monitoring & evaluation

class EvaluationCreate(CamelModel):
    project_id: Text
    evaluation_type: EvaluationType
    evaluation_date: Timestamp
    findings: Optional[str] = None
    recommendations: Optional[str] = None
    score: Optional[Percent] = None
    evaluator_id: Optional[str] = None


class EvaluationUpdate(PartialUpdate):
    not_null: ClassVar[tuple[str, ...]] = ("project_id", "evaluation_type", "evaluation_date")

    project_id: Optional[Text] = None
    evaluation_type: Optional[EvaluationType] = None
    evaluation_date: Optional[Timestamp] = None
    findings: Optional[str] = None
    recommendations: Optional[str] = None
    score: Optional[Percent] = None
    evaluator_id: Optional[str] = None


class EvaluationResponse(CamelModel):
    id: str
    project_id: str
    evaluation_type: str
    evaluation_date: datetime
    findings: Optional[str] = None
    recommendations: Optional[str] = None
    score: Optional[int] = None
    evaluator_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class EvaluationSummary(CamelModel):
    project_id: str
    latest_evaluation: Optional[EvaluationResponse] = None
    score: int = 0
    evaluation_count: int = 0


# Assets

class AssetCreate(CamelModel):
    name: Text
    description: Optional[str] = None
    category: Text
    serial_number: Optional[str] = None
    purchase_date: Optional[Timestamp] = None
    purchase_value: Optional[Money] = None
    current_value: Optional[Money] = None
    status: AssetStatus = AssetStatus.ACTIVE
    assigned_to: Optional[str] = None
    location: Optional[str] = None


class AssetUpdate(PartialUpdate):
    not_null: ClassVar[tuple[str, ...]] = ("name", "category", "status")

    name: Optional[Text] = None
    description: Optional[str] = None
    category: Optional[Text] = None
    serial_number: Optional[str] = None
    purchase_date: Optional[Timestamp] = None
    purchase_value: Optional[Money] = None
    current_value: Optional[Money] = None
    status: Optional[AssetStatus] = None
    assigned_to: Optional[str] = None
    location: Optional[str] = None


class AssetResponse(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    category: str
    serial_number: Optional[str] = None
    purchase_date: Optional[datetime] = None
    purchase_value: Optional[Decimal] = None
    current_value: Optional[Decimal] = None
    status: str
    assigned_to: Optional[str] = None
    location: Optional[str] = None
    created_at: datetime
    updated_at: datetime


# Reports & dashboard

class ReportCreate(CamelModel):
    type: ReportType
    description: Optional[str] = None
    created_by: Optional[str] = None


class ReportResponse(CamelModel):
    id: str
    name: str
    type: str
    description: Optional[str] = None
    generated_at: datetime
    status: str
    file_path: Optional[str] = None
    created_by: Optional[str] = None
    created_at: datetime


class DashboardStats(CamelModel):
    active_projects: int
    total_employees: int
    pending_tasks: int
    monthly_revenue: float
