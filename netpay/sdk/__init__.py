"""Net Pay SDK - Core functionality for gross-to-net salary calculations."""

from .config import (
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    unset_setting,
    # Jurisdictions
    get_bundled_jurisdictions_dir,
    get_user_jurisdictions_dir,
    list_jurisdictions,
    resolve_jurisdiction_path,
    load_jurisdiction,
    clear_jurisdiction_cache,
    load_salary_input,
    JurisdictionNotFoundError,
    ConfigValidationError,
    DEFAULT_JURISDICTION,
)

from .schemas import (
    BonusEntry,
    SalaryInput,
    SalaryBreakdown,
    SocialContributions,
    AllowanceSummary,
    MONTHS_PER_YEAR,
)

from .bonuses import (
    distribute_bonuses,
    resolve_bonus_value,
)

from .salary import (
    compute_breakdown,
    get_tax_class,
    TaxClassNotFoundError,
)

from .taxes import JurisdictionConfig

__all__ = [
    # Settings
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "unset_setting",
    # Jurisdictions
    "get_bundled_jurisdictions_dir",
    "get_user_jurisdictions_dir",
    "list_jurisdictions",
    "resolve_jurisdiction_path",
    "load_jurisdiction",
    "clear_jurisdiction_cache",
    "load_salary_input",
    "JurisdictionNotFoundError",
    "ConfigValidationError",
    "DEFAULT_JURISDICTION",
    "JurisdictionConfig",
    # Schemas
    "BonusEntry",
    "SalaryInput",
    "SalaryBreakdown",
    "SocialContributions",
    "AllowanceSummary",
    "MONTHS_PER_YEAR",
    # Computation
    "distribute_bonuses",
    "resolve_bonus_value",
    "compute_breakdown",
    "get_tax_class",
    "TaxClassNotFoundError",
]
