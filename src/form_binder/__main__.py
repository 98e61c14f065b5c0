"""CLI entry point — ``python -m form_binder``."""

from __future__ import annotations

import argparse
import json
import sys
import tempfile
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()

from pydantic import BaseModel

from form_binder.engine import FormEngine
from form_binder.registry import list_registered


def _print_modules() -> None:
    """Print all registered transformers and lookups."""
    modules = list_registered()
    for category, entries in modules.items():
        print(f"\n{category.upper()}")
        print("-" * len(category))
        if not entries:
            print("  (none)")
        for key, class_name in entries.items():
            print(f"  {key:30s} {class_name}")
    print()


def _to_jsonable(value: Any) -> Any:
    """``json.dumps`` fallback for models, decimals and datetimes."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


def _read_json(path: str) -> Any:
    return json.loads(Path(path).read_text())


def _write_json_atomic(path: str | Path, payload: Any) -> None:
    """Write *payload* as JSON via temp-file-then-rename."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=target.parent, suffix=".tmp")
    try:
        with open(fd, "w") as fh:
            json.dump(payload, fh, indent=2, default=_to_jsonable)
        Path(tmp_path).replace(target)
    except BaseException:
        Path(tmp_path).unlink(missing_ok=True)
        raise


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="form-binder",
        description="Render or submit data through a configuration-driven form.",
    )
    parser.add_argument(
        "-c", "--config",
        help="Path to the form YAML config file.",
    )
    parser.add_argument(
        "-d", "--data",
        help="Path to a JSON object holding the model data (default: empty).",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "-r", "--render",
        action="store_true",
        default=False,
        help="Print the view values for the model data as JSON.",
    )
    mode.add_argument(
        "-s", "--submit",
        help="Path to a JSON object of submitted view values.",
    )
    parser.add_argument(
        "-o", "--output",
        help="Write the updated model data here after --submit.",
    )
    parser.add_argument(
        "--keep-missing",
        action="store_true",
        default=False,
        help="Leave fields absent from the submission untouched instead of clearing them.",
    )
    parser.add_argument(
        "-l", "--list-modules",
        action="store_true",
        default=False,
        help="List all registered transformers and lookups, then exit.",
    )

    args = parser.parse_args(argv)

    if args.list_modules:
        _print_modules()
        return

    if args.config is None:
        parser.error("the following argument is required: -c/--config")
    if not args.render and args.submit is None:
        parser.error("one of the arguments -r/--render -s/--submit is required")

    data: dict[str, Any] = _read_json(args.data) if args.data else {}
    engine = FormEngine(args.config)

    if args.render:
        result = engine.render(data)
        print(json.dumps(result.values, indent=2, default=_to_jsonable))
        return

    submission = engine.submit(
        data, _read_json(args.submit), clear_missing=not args.keep_missing
    )
    report = {
        "valid": submission.is_valid,
        "errors": submission.errors,
        "data": data,
    }
    print(json.dumps(report, indent=2, default=_to_jsonable))

    if args.output:
        _write_json_atomic(args.output, data)

    if not submission.is_valid:
        sys.exit(1)


if __name__ == "__main__":
    main()
