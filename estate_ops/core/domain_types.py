"""Domain Types — closed enumerations for every entity.

Invariants:
    - Every valid state is an Enum member — no raw string matching in validators
    - EmployeeStatus is exactly PENDING / HR_VERIFIED / ADMIN_APPROVED

Design Decisions:
    - str Enums: records round-trip through JSON and SQL string columns without custom encoders
"""

from enum import Enum


# ─── Entity Kinds ────────────────────────────────────────────────

class EntityKind(str, Enum):
    """The four persisted entity kinds. Company is the tenant root."""
    COMPANY = "company"
    USER = "user"
    EMPLOYEE_PROFILE = "employee_profile"
    PROJECT = "project"


class MutationKind(str, Enum):
    """Create carries a full candidate; update carries only explicit changes."""
    CREATE = "create"
    UPDATE = "update"


# ─── Company ─────────────────────────────────────────────────────

class CompanyEmailType(str, Enum):
    PRIMARY = "PRIMARY"
    BILLING = "BILLING"
    SUPPORT = "SUPPORT"
    HR = "HR"


class CompanyType(str, Enum):
    PRIVATE_LIMITED = "PRIVATE_LIMITED"
    PUBLIC_LIMITED = "PUBLIC_LIMITED"
    LLP = "LLP"
    PARTNERSHIP = "PARTNERSHIP"
    PROPRIETORSHIP = "PROPRIETORSHIP"


class IndustryType(str, Enum):
    REAL_ESTATE = "REAL_ESTATE"
    CONSTRUCTION = "CONSTRUCTION"
    INFRASTRUCTURE = "INFRASTRUCTURE"
    PROPERTY_MANAGEMENT = "PROPERTY_MANAGEMENT"
    OTHER = "OTHER"


class CreatedByRole(str, Enum):
    """Creation origin of a company."""
    SUPER_ADMIN = "SUPER_ADMIN"
    SELF_REGISTERED = "SELF_REGISTERED"


class SubscriptionPlan(str, Enum):
    BASIC = "BASIC"
    PRO = "PRO"
    ENTERPRISE = "ENTERPRISE"


class SubscriptionStatus(str, Enum):
    TRIAL = "TRIAL"
    ACTIVE = "ACTIVE"
    EXPIRED = "EXPIRED"
    SUSPENDED = "SUSPENDED"


# ─── User ────────────────────────────────────────────────────────

class Role(str, Enum):
    """PLATFORM_SUPER_ADMIN is platform-wide; every other role is a tenant role."""
    PLATFORM_SUPER_ADMIN = "PLATFORM_SUPER_ADMIN"
    COMPANY_ADMIN = "COMPANY_ADMIN"
    HR_MANAGER = "HR_MANAGER"
    PROJECT_MANAGER = "PROJECT_MANAGER"
    EMPLOYEE = "EMPLOYEE"


class UserStatus(str, Enum):
    INVITED = "INVITED"
    ACTIVE = "ACTIVE"
    SUSPENDED = "SUSPENDED"


# ─── Employee Profile ────────────────────────────────────────────

class Gender(str, Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"
    OTHER = "OTHER"


class EmployeeStatus(str, Enum):
    """Verification state machine: PENDING -> HR_VERIFIED -> ADMIN_APPROVED."""
    PENDING = "PENDING"
    HR_VERIFIED = "HR_VERIFIED"
    ADMIN_APPROVED = "ADMIN_APPROVED"


# ─── Project ─────────────────────────────────────────────────────

class ProjectType(str, Enum):
    RESIDENTIAL = "RESIDENTIAL"
    COMMERCIAL = "COMMERCIAL"
    MIXED_USE = "MIXED_USE"
    INFRASTRUCTURE = "INFRASTRUCTURE"


class ProjectStatus(str, Enum):
    PLANNING = "PLANNING"
    ACTIVE = "ACTIVE"
    ON_HOLD = "ON_HOLD"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
