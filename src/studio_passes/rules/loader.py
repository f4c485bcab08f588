import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from studio_passes.rules.models import StudioRules

logger = logging.getLogger(__name__)

# Default rules file name (relative to project root)
DEFAULT_RULES_FILENAME = "studio_rules.yaml"
RULES_PATH_ENV = "STUDIO_RULES_PATH"


def _find_project_root() -> Path:
    """Find project root by looking for marker files."""
    current = Path.cwd()

    for parent in [current, *current.parents]:
        if (parent / "pyproject.toml").exists() or (parent / ".git").exists():
            return parent

    return current


def resolve_rules_path(path: Path | str | None = None) -> Path:
    """
    Resolve the rules file location.
    Explicit path first, then STUDIO_RULES_PATH, then the project root.
    """
    if path is not None:
        return Path(path)

    env_path = os.environ.get(RULES_PATH_ENV)
    if env_path:
        return Path(env_path)

    return _find_project_root() / DEFAULT_RULES_FILENAME


def _strip_code_fence(content: str) -> str:
    # Rules may live inside a ```yaml block of a markdown file
    yaml_lines = []
    in_block = False
    found_block = False

    for line in content.splitlines():
        s_line = line.strip()
        if s_line.startswith("```yaml"):
            in_block = True
            found_block = True
            continue
        if in_block and s_line.startswith("```"):
            break

        if in_block:
            yaml_lines.append(line)

    if found_block:
        return "\n".join(yaml_lines)
    return content


def parse_rules(content: str) -> StudioRules:
    """
    Parse and validate rules text.
    Raises ValueError if the YAML or the schema is invalid.
    """
    try:
        data = yaml.safe_load(_strip_code_fence(content))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in rules file: {e}") from e

    try:
        return StudioRules.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Rules validation failed:\n{e}") from e


def load_rules(path: Path | str | None = None) -> StudioRules:
    """
    Load and validate the rules file.
    Raises FileNotFoundError if file missing.
    Raises ValueError if schema invalid.
    """
    rules_path = resolve_rules_path(path)
    if not rules_path.exists():
        raise FileNotFoundError(f"Rules file not found at: {rules_path}")

    with open(rules_path) as f:
        content = f.read()

    rules = parse_rules(content)
    logger.info(
        f"Loaded rules {rules.project.slug} v{rules.project.rules_version} from {rules_path}"
    )
    return rules
