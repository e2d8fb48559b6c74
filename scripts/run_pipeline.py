#!/usr/bin/env python3
"""
Credit Default Pipeline CLI

Usage:
    # Run with YAML config:
    python scripts/run_pipeline.py --config config/pipeline.yaml

    # Override specific settings via CLI:
    python scripts/run_pipeline.py \
        --config config/pipeline.yaml \
        --input data/credit.csv \
        --test-size 0.3 --seed 7
"""

import sys
import argparse
from pathlib import Path

# Add project root to path
project_root = str(Path(__file__).resolve().parent.parent)
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from credit_default.config.loader import load_config
from credit_default.core.exceptions import PipelineException
from credit_default.core.logger import get_logger, setup_logging
from credit_default.io.output_manager import OutputManager
from credit_default.pipeline.training import CreditDefaultPipeline


logger = get_logger("run_pipeline")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description='Credit Default Model Training and Monitoring Export',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        '--config', default=None,
        help='Path to YAML config file (e.g., config/pipeline.yaml)',
    )
    parser.add_argument(
        '--input', default=None,
        help='Path to the delimited input dataset (overrides config)',
    )
    parser.add_argument(
        '--output-dir', default=None,
        help='Base directory for run outputs',
    )
    parser.add_argument(
        '--test-size', type=float, default=None,
        help='Fraction of rows in the test (sample) split',
    )
    parser.add_argument(
        '--seed', type=int, default=None,
        help='Random seed for the split and the solver',
    )
    parser.add_argument(
        '--target-column', default=None,
        help='Name of the binary label column',
    )
    parser.add_argument(
        '--log-level', default=None,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Console log level',
    )
    return parser.parse_args(argv)


def _build_cli_overrides(args) -> dict:
    """Build a flat dot-notation override dict from CLI args."""
    return {
        "data.input_path": args.input,
        "data.target_column": args.target_column,
        "output.base_dir": args.output_dir,
        "splitting.test_size": args.test_size,
        "reproducibility.global_seed": args.seed,
        "reproducibility.log_level": args.log_level,
    }


def main(argv=None) -> int:
    args = parse_args(argv)

    config = load_config(yaml_path=args.config, cli_overrides=_build_cli_overrides(args))

    output_manager = OutputManager(config)
    setup_logging(
        log_level=config.reproducibility.log_level,
        log_file=output_manager.get_log_path(),
    )

    if config.reproducibility.save_config:
        output_manager.save_config_snapshot(config)

    try:
        result = CreditDefaultPipeline(config, output_manager).run()
    except PipelineException as e:
        logger.error("Run %s failed: %s", output_manager.run_id, e)
        return 1

    print(f"\n{'='*60}")
    print(result.summary())
    print(f"Run directory: {output_manager.run_dir}")
    print(f"{'='*60}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
