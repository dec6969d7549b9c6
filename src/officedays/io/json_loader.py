"""JSON loading and saving for employee lists."""
import json
from pathlib import Path
from typing import Any, List, Sequence, Union

from officedays.models.employee import Employee, Sex, split_fixed_days
from officedays.utils.logging_setup import get_logger, log_function_call

logger = get_logger("officedays.io.json_loader")

REQUIRED_FIELDS = ("name", "sex", "role", "required_days")


def _parse_record(record: Any, default_id: int) -> Employee:
    if not isinstance(record, dict):
        raise ValueError(f"expected an object, got {type(record).__name__}")
    missing = [f for f in REQUIRED_FIELDS if f not in record]
    if missing:
        raise ValueError(f"missing field(s): {', '.join(missing)}")

    name = str(record["name"]).strip()
    if not name:
        raise ValueError("name cannot be empty")

    required = record["required_days"]
    if isinstance(required, bool) or not isinstance(required, int) or required < 0:
        raise ValueError(f"required_days must be a non-negative integer, got {required!r}")

    fixed = record.get("fixed_days") or []
    if not isinstance(fixed, list):
        raise ValueError("fixed_days must be a list")
    days, weekdays = split_fixed_days(fixed)

    return Employee(
        id=int(record.get("id", default_id)),
        name=name,
        sex=Sex.from_string(record["sex"]),
        role=str(record["role"]).strip(),
        required_days=required,
        fixed_days=days,
        fixed_weekdays=weekdays,
        is_nsp=bool(record.get("is_nsp", False)),
    )


@log_function_call
def load_employees(source: Union[str, Path, Sequence[dict]]) -> List[Employee]:
    """
    Load employees from a JSON array.

    Args:
        source: Path to a JSON file, a JSON string, or an already parsed list

    Returns:
        List of Employee objects; records without ``id`` get sequential ids
        starting after the largest explicit one

    Raises:
        ValueError: malformed JSON or a bad record (its index is named)
    """
    if isinstance(source, Path) or (isinstance(source, str) and not source.lstrip().startswith("[")):
        with open(source, encoding="utf-8") as fh:
            data = json.load(fh)
    elif isinstance(source, str):
        data = json.loads(source)
    else:
        data = list(source)

    if not isinstance(data, list):
        raise ValueError("employee JSON must be an array of objects")

    explicit = [r["id"] for r in data if isinstance(r, dict) and "id" in r]
    next_id = max((int(i) for i in explicit), default=-1) + 1

    employees = []
    for idx, record in enumerate(data):
        default_id = next_id
        if not (isinstance(record, dict) and "id" in record):
            next_id += 1
        try:
            employees.append(_parse_record(record, default_id))
        except (ValueError, TypeError) as e:
            raise ValueError(f"Error converting employee at index {idx}: {e}") from e

    logger.info(f"Loaded {len(employees)} employees")
    return employees


def save_employees(employees: Sequence[Employee], path: Union[str, Path]) -> None:
    """Save employees as a JSON array readable by ``load_employees``."""
    rows = [e.to_dict() for e in employees]
    Path(path).write_text(json.dumps(rows, ensure_ascii=False, indent=2), encoding="utf-8")
