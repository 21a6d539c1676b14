from enum import Enum


class OutputUnit(str, Enum):
    DOLLARS = "dollars"
    PERCENTAGE = "percentage"
    BOOLEAN = "boolean"


class ImpactSemantics(str, Enum):
    # benefit: a positive result is good for the user (savings, credits)
    # burden: a positive result is bad for the user (taxes, fees)
    BENEFIT = "benefit"
    BURDEN = "burden"


class ImpactUnit(str, Enum):
    DOLLARS_ANNUAL = "dollars_annual"
    DOLLARS_MONTHLY = "dollars_monthly"
    DOLLARS_ONE_TIME = "dollars_one_time"
    PERCENTAGE = "percentage"
    QUALITATIVE = "qualitative"


class ImpactDirection(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"
    MIXED = "mixed"


class CalculationStatus(str, Enum):
    COMPUTED = "computed"
    CANNOT_COMPUTE = "cannot_compute"


class CaveatType(str, Enum):
    ASSUMPTION = "assumption"
    APPROXIMATION = "approximation"
    MISSING_DATA = "missing_data"
    POLICY_UNCERTAINTY = "policy_uncertainty"
    TIMING = "timing"
    ELIGIBILITY = "eligibility"
    INTERACTION = "interaction"


class CaveatSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class PolicyType(str, Enum):
    TAX_CHANGE = "tax_change"
    TAX_CREDIT = "tax_credit"
    BENEFIT_NEW = "benefit_new"
    BENEFIT_MODIFICATION = "benefit_modification"
    BENEFIT_ELIMINATION = "benefit_elimination"
    SUBSIDY = "subsidy"
    MANDATE = "mandate"
    REGULATION = "regulation"
    OTHER = "other"


class TaxType(str, Enum):
    INCOME = "income"
    PAYROLL = "payroll"
    CAPITAL_GAINS = "capital_gains"
    SALES = "sales"
    PROPERTY = "property"
    OTHER = "other"


class MaritalStatus(str, Enum):
    SINGLE = "single"
    MARRIED = "married"
    DIVORCED = "divorced"
    WIDOWED = "widowed"
    SEPARATED = "separated"


class EmploymentStatus(str, Enum):
    EMPLOYED_FULL_TIME = "employed_full_time"
    EMPLOYED_PART_TIME = "employed_part_time"
    SELF_EMPLOYED = "self_employed"
    UNEMPLOYED = "unemployed"
    RETIRED = "retired"
    STUDENT = "student"
    DISABLED = "disabled"


class TaxFilingStatus(str, Enum):
    SINGLE = "single"
    MARRIED_FILING_JOINTLY = "married_filing_jointly"
    MARRIED_FILING_SEPARATELY = "married_filing_separately"
    HEAD_OF_HOUSEHOLD = "head_of_household"
    QUALIFYING_WIDOW = "qualifying_widow"


class HousingStatus(str, Enum):
    RENT = "rent"
    OWN = "own"
    OTHER = "other"


class InsuranceStatus(str, Enum):
    INSURED = "insured"
    UNINSURED = "uninsured"
    UNDERINSURED = "underinsured"


class InsuranceType(str, Enum):
    EMPLOYER = "employer"
    MARKETPLACE = "marketplace"
    MEDICAID = "medicaid"
    MEDICARE = "medicare"
    VA = "va"
    TRICARE = "tricare"
    PRIVATE = "private"
    NONE = "none"


class StudentStatus(str, Enum):
    NOT_STUDENT = "not_student"
    PART_TIME = "part_time"
    FULL_TIME = "full_time"


class InstitutionType(str, Enum):
    PUBLIC_2YEAR = "public_2year"
    PUBLIC_4YEAR = "public_4year"
    PRIVATE_NONPROFIT = "private_nonprofit"
    PRIVATE_FORPROFIT = "private_forprofit"
    NONE = "none"
