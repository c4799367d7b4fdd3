import logging
import threading
from contextlib import contextmanager
from datetime import datetime, timedelta
from decimal import Decimal
from sqlalchemy.exc import IntegrityError
from app.core.errors import ConflictError
from app.db.session import create_db_engine, create_session_factory
from app.models.base import Base
from app.models.models import (
    User, Employee, Project, Task, KPI, Transaction, PayrollRecord, Proposal,
    Evaluation, Report, Asset, gen_uuid
)

logger = logging.getLogger(__name__)

PROTECTED_FIELDS = ("id", "created_at", "updated_at")


class StoreClock:
    """Strictly increasing naive-UTC timestamps; two calls never return the same instant."""

    def __init__(self):
        self._last = None

    def now(self) -> datetime:
        stamp = datetime.utcnow()
        if self._last is not None and stamp <= self._last:
            stamp = self._last + timedelta(microseconds=1)
        self._last = stamp
        return stamp


def compute_net_pay(base_salary, allowances=None, deductions=None) -> Decimal:
    return Decimal(base_salary) + Decimal(allowances or 0) - Decimal(deductions or 0)


class Collection:
    """Keyed storage for one entity type: list, get, create, delete.

    Lookups on a missing id return ``None`` / ``False``; nothing here raises for
    an absent record.
    """

    model = None
    label = "Record"
    defaults: dict = {}
    unique_fields: dict = {}

    def __init__(self, store: "EntityStore"):
        self._store = store

    @property
    def _columns(self):
        return set(self.model.__table__.columns.keys())

    def _query(self, db):
        return db.query(self.model).order_by(self.model.created_at, self.model.id)

    def list(self):
        with self._store.session() as db:
            return self._query(db).all()

    def filter_by(self, **criteria):
        with self._store.session() as db:
            return self._query(db).filter_by(**criteria).all()

    def count(self) -> int:
        with self._store.session() as db:
            return db.query(self.model).count()

    def get(self, record_id: str):
        if not record_id:
            return None
        with self._store.session() as db:
            return db.get(self.model, record_id)

    def create(self, fields: dict, record_id: str | None = None):
        columns = self._columns
        values = {k: v for k, v in fields.items() if k in columns and k not in PROTECTED_FIELDS}
        for key, default in self.defaults.items():
            if values.get(key) is None:
                values[key] = default() if callable(default) else default

        with self._store.session() as db:
            self._check_unique(db, values)
            now = self._store.clock.now()
            values = self._prepare_create(values, now)
            record = self.model(id=record_id or gen_uuid(), **values)
            record.created_at = now
            if "updated_at" in columns:
                record.updated_at = now
            db.add(record)
            self._commit(db)
            db.refresh(record)
            logger.info("Created %s %s", self.label, record.id)
            return record

    def delete(self, record_id: str) -> bool:
        with self._store.session() as db:
            record = db.get(self.model, record_id) if record_id else None
            if record is None:
                logger.debug("%s %s not found for delete", self.label, record_id)
                return False
            db.delete(record)
            db.commit()
            logger.info("Deleted %s %s", self.label, record_id)
            return True

    def _prepare_create(self, values: dict, now: datetime) -> dict:
        return values

    def _check_unique(self, db, values: dict, exclude_id: str | None = None):
        for field, description in self.unique_fields.items():
            value = values.get(field)
            if value is None:
                continue
            q = db.query(self.model).filter(getattr(self.model, field) == value)
            if exclude_id is not None:
                q = q.filter(self.model.id != exclude_id)
            if q.first() is not None:
                raise ConflictError(f"{self.label} with {description} '{value}' already exists")

    def _commit(self, db):
        try:
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            logger.info("%s write rejected by constraint: %s", self.label, exc.orig)
            raise ConflictError(f"{self.label} conflicts with an existing record") from exc


class MutableCollection(Collection):
    """Adds in-place updates with ``updated_at`` bookkeeping."""

    def update(self, record_id: str, changes: dict):
        columns = self._columns
        values = {k: v for k, v in changes.items() if k in columns and k not in PROTECTED_FIELDS}
        with self._store.session() as db:
            record = db.get(self.model, record_id) if record_id else None
            if record is None:
                logger.debug("%s %s not found for update", self.label, record_id)
                return None
            self._check_unique(db, values, exclude_id=record.id)
            now = self._store.clock.now()
            self._apply_update(record, values, now)
            record.updated_at = now
            self._commit(db)
            db.refresh(record)
            logger.info("Updated %s %s (%s)", self.label, record_id, ", ".join(sorted(values)) or "no fields")
            return record

    def _apply_update(self, record, values: dict, now: datetime):
        for key, value in values.items():
            setattr(record, key, value)


class UserCollection(MutableCollection):
    model = User
    label = "User"
    defaults = {"role": "user", "permissions": list, "is_active": True}
    unique_fields = {"email": "email"}

    def get_by_email(self, email: str):
        if not email:
            return None
        with self._store.session() as db:
            return db.query(User).filter(User.email == email).first()


class EmployeeCollection(MutableCollection):
    model = Employee
    label = "Employee"
    defaults = {"status": "active"}
    unique_fields = {"employee_id": "employee ID", "email": "email"}


class ProjectCollection(MutableCollection):
    model = Project
    label = "Project"
    defaults = {"status": "active", "progress": 0}


class TaskCollection(MutableCollection):
    model = Task
    label = "Task"
    defaults = {"status": "pending", "priority": "medium"}

    def list_by_project(self, project_id: str):
        return self.filter_by(project_id=project_id)

    def list_by_assignee(self, employee_id: str):
        return self.filter_by(assignee_id=employee_id)


class KPICollection(MutableCollection):
    model = KPI
    label = "KPI"


class TransactionCollection(MutableCollection):
    model = Transaction
    label = "Transaction"

    def list_by_project(self, project_id: str):
        return self.filter_by(project_id=project_id)


class PayrollCollection(MutableCollection):
    model = PayrollRecord
    label = "Payroll record"
    defaults = {"status": "pending", "allowances": Decimal("0"), "deductions": Decimal("0")}

    def list_by_employee(self, employee_id: str):
        return self.filter_by(employee_id=employee_id)

    def _prepare_create(self, values, now):
        values["net_pay"] = compute_net_pay(
            values.get("base_salary"), values.get("allowances"), values.get("deductions")
        )
        values["approved_at"] = now if values.get("approved_by") else None
        return values

    def _apply_update(self, record, values, now):
        # approved_at is stamped once, the first time an approver is recorded
        values.pop("approved_at", None)
        newly_approved = bool(values.get("approved_by")) and record.approved_at is None
        super()._apply_update(record, values, now)
        if newly_approved:
            record.approved_at = now


class ProposalCollection(MutableCollection):
    model = Proposal
    label = "Proposal"
    defaults = {"status": "draft"}


class EvaluationCollection(MutableCollection):
    model = Evaluation
    label = "Evaluation"

    def list_by_project(self, project_id: str):
        return self.filter_by(project_id=project_id)


class ReportCollection(Collection):
    model = Report
    label = "Report"
    defaults = {"status": "pending"}

    def _prepare_create(self, values, now):
        values.setdefault("generated_at", now)
        return values


class AssetCollection(MutableCollection):
    model = Asset
    label = "Asset"
    defaults = {"status": "active"}
    unique_fields = {"serial_number": "serial number"}

    def list_by_assignee(self, employee_id: str):
        return self.filter_by(assigned_to=employee_id)


class EntityStore:
    """All entity collections behind one lock.

    Every operation opens its own session while holding the store lock, so
    writes never interleave even when FastAPI runs handlers on worker threads.
    """

    def __init__(self, database_url: str = "sqlite://", seed: bool = False, admin_password: str = "admin123"):
        self.engine = create_db_engine(database_url)
        Base.metadata.create_all(bind=self.engine)
        self._session_factory = create_session_factory(self.engine)
        self._lock = threading.RLock()
        self.clock = StoreClock()

        self.users = UserCollection(self)
        self.employees = EmployeeCollection(self)
        self.projects = ProjectCollection(self)
        self.tasks = TaskCollection(self)
        self.kpis = KPICollection(self)
        self.transactions = TransactionCollection(self)
        self.payroll = PayrollCollection(self)
        self.proposals = ProposalCollection(self)
        self.evaluations = EvaluationCollection(self)
        self.reports = ReportCollection(self)
        self.assets = AssetCollection(self)

        if seed:
            from app.services.seed import seed_store
            seed_store(self, admin_password=admin_password)

    @contextmanager
    def session(self):
        with self._lock:
            db = self._session_factory()
            try:
                yield db
            except Exception:
                db.rollback()
                raise
            finally:
                db.close()

    def dispose(self):
        self.engine.dispose()
