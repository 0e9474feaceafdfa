from __future__ import annotations

import argparse
import dataclasses
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from src.config.loader import DEFAULT_CONFIG_PATH, ConfigError, TransformConfig, load_config
from src.logging.init import enable_debug, log_summary, setup_logging
from src.models.config_models import HardnessStrategy, HeightPolicy
from src.models.output_record import OUTPUT_HEADER
from src.services.orchestrator import ProcessingError, collect_input_files, process_all
from src.services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env (TRANSFORM_CONFIG may point at the config file)
- Load config (defaults when the default config file does not exist)
- Resolve input workbooks (arguments, else config source_directory)
- Transform and write one normalized workbook per input, or print a preview
  with --inspect-data
- Print the SUMMARY line and exit with 0 / 2 / 1
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1

CONFIG_ENV_VAR = "TRANSFORM_CONFIG"
INSPECT_LIMIT = 5


def _load_env_file(path: Path, override: bool = False) -> None:
    """Load .env using python-dotenv. Failures only print a warning."""
    try:
        if path.exists():
            load_dotenv(dotenv_path=path, override=override)
    except OSError as e:  # pragma: no cover
        print(f"WARNING: failed to load .env via python-dotenv: {e}")


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Normalize hardness test workbooks into a flat record sheet")
    p.add_argument("inputs", nargs="*", type=Path, help="Input .xlsx files or directories (default: config source_directory)")
    p.add_argument("--config", type=Path, default=None, help=f"Config YAML (default: ${CONFIG_ENV_VAR} or {DEFAULT_CONFIG_PATH})")
    p.add_argument("--output-dir", type=Path, default=None, help="Output directory (default: config output_directory)")
    p.add_argument(
        "--strategy",
        choices=[s.value for s in HardnessStrategy],
        default=None,
        help="Hardness encoding variant (overrides config)",
    )
    p.add_argument(
        "--height-policy",
        choices=[h.value for h in HeightPolicy],
        default=None,
        help="CSA height column policy (overrides config)",
    )
    p.add_argument("--debug", action="store_true", help="Enable debug logging (per-row skip reasons)")
    p.add_argument("--inspect-data", action="store_true", help="Print the first normalized records per file then exit")
    return p.parse_args(argv)


def _resolve_config(args: argparse.Namespace) -> TransformConfig:
    explicit = args.config or (Path(os.environ[CONFIG_ENV_VAR]) if os.getenv(CONFIG_ENV_VAR) else None)
    if explicit is not None:
        cfg = load_config(explicit)
    elif DEFAULT_CONFIG_PATH.exists():
        cfg = load_config(DEFAULT_CONFIG_PATH)
    else:
        cfg = TransformConfig()

    # CLI 指定は設定ファイルより優先
    settings = cfg.settings
    if args.strategy:
        settings = dataclasses.replace(settings, hardness_strategy=HardnessStrategy(args.strategy))
    if args.height_policy:
        settings = dataclasses.replace(settings, height_policy=HeightPolicy(args.height_policy))
    return dataclasses.replace(cfg, settings=settings)


def _format_cell(value: object) -> str:
    return "" if value is None else str(value)


def _inspect_data(cfg: TransformConfig, inputs: list[Path]) -> int:
    from src.excel.reader import WorkbookReadError, read_workbook
    from src.services.transformer import transform_workbook

    try:
        files = collect_input_files(inputs)
    except ProcessingError as e:
        print(f"inspect: {e}")
        return EXIT_FATAL
    if not files:
        print("inspect: no .xlsx files")
        return EXIT_SUCCESS_ALL
    failed = 0
    for f in files:
        print(f"FILE: {f.name}")
        try:
            workbook = read_workbook(f)
        except WorkbookReadError as e:
            print(f"  read_error: {e}")
            failed += 1
            continue
        result = transform_workbook(workbook, cfg.settings)
        for stat in result.sheet_stats:
            print(
                f"  SHEET: {stat.sheet_name} data_start={stat.data_start_row} "
                f"records={stat.records_emitted} skipped={stat.skipped_rows}"
            )
        print("    " + " | ".join(OUTPUT_HEADER))
        for record in result.records[:INSPECT_LIMIT]:
            print("    " + " | ".join(_format_cell(v) for v in record.to_row()))
    return EXIT_PARTIAL_FAILURE if failed else EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみシステム引数を読む (テストで main([]) を呼ぶため)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"))

    try:
        cfg = _resolve_config(args)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.debug:
        enable_debug()
        logger.debug("debug mode enabled")

    inputs = list(args.inputs) or [Path(cfg.source_directory)]
    logger.info(
        "inputs=%s strategy=%s height_policy=%s",
        ",".join(str(p) for p in inputs),
        cfg.settings.hardness_strategy.value,
        cfg.settings.height_policy.value,
    )

    if args.inspect_data:
        return _inspect_data(cfg, inputs)

    try:
        result = process_all(cfg, inputs=inputs, output_dir=args.output_dir)
    except ProcessingError as e:
        logger.error(f"input: {e}")
        return EXIT_FATAL

    total_files = result.success_files + result.failed_files
    summary_line = render_summary_line(total_files, result)
    log_summary(summary_line.removeprefix("SUMMARY "))

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
