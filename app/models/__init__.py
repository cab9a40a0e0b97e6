from app.db.base_class import Base
from app.models.organization import Organization
from app.models.user import User, UserRole
from app.models.transaction import Transaction, TransactionStatus, TransactionType
from app.models.system_setting import SystemSetting
from app.models.feature_matrix import FeatureMatrixOverride
from app.models.plan_tracking import PlanImplementationTracking
from app.models.asset import Asset
from app.models.issue_report import IssueReport, IssueStatus, IssueType
from app.models.maintenance_task import MaintenanceTask, TaskPriority, TaskStatus
from app.models.road_inspection import RoadInspection
