#!/usr/bin/env python3
"""
Predict with a persisted credit default model.

Usage:
    # One record as JSON:
    python scripts/predict.py --model outputs/.../model/credit_default_model.joblib \
        --record '{"id": 1, "gender": "female", "age": 35, ...}'

    # A whole delimited file, written as JSON lines:
    python scripts/predict.py --model ... --input data/new.csv --output scored.json
"""

import sys
import argparse
import json
from pathlib import Path

project_root = str(Path(__file__).resolve().parent.parent)
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from credit_default.core.exceptions import PipelineException
from credit_default.core.logger import get_logger, setup_logging
from credit_default.pipeline.scoring import score_file, score_record


logger = get_logger("predict")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Score records with a saved model')
    parser.add_argument('--model', required=True, help='Path to the model bundle')
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument('--record', help='Single record as a JSON object')
    source.add_argument('--input', help='Delimited file to score')
    parser.add_argument('--output', default=None, help='JSON lines output (with --input)')
    parser.add_argument('--delimiter', default=',', help='Input field separator')
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(log_level="WARNING")

    try:
        if args.record is not None:
            record = json.loads(args.record)
            if not isinstance(record, dict):
                logger.error("--record must be a JSON object")
                return 2
            print(json.dumps({"prediction": score_record(args.model, record)}))
        else:
            output = args.output or str(Path(args.input).with_suffix('.scored.json'))
            print(score_file(args.model, args.input, output, delimiter=args.delimiter))
    except json.JSONDecodeError as e:
        logger.error("Invalid --record JSON: %s", e)
        return 2
    except PipelineException as e:
        logger.error("Scoring failed: %s", e)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
