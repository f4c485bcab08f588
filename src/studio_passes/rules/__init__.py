from studio_passes.rules.loader import (
    DEFAULT_RULES_FILENAME,
    RULES_PATH_ENV,
    load_rules,
    parse_rules,
    resolve_rules_path,
)
from studio_passes.rules.models import IssuanceRules, PassesRules, ProjectRules, StudioRules

__all__ = [
    "DEFAULT_RULES_FILENAME",
    "RULES_PATH_ENV",
    "IssuanceRules",
    "PassesRules",
    "ProjectRules",
    "StudioRules",
    "load_rules",
    "parse_rules",
    "resolve_rules_path",
]
