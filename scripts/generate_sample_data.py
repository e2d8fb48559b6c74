"""
Sample Data Generator

Generates a synthetic credit default dataset with the columns the
pipeline expects (id, gender, label) plus numeric and categorical
predictors. Defaults depend on the predictors through a logistic link.
"""

from pathlib import Path
from typing import Optional
import argparse

import numpy as np
import pandas as pd


RANDOM_SEED = 42

EDUCATION_LEVELS = {
    'graduate_school': {'weight': 0.35, 'effect': -0.30},
    'university': {'weight': 0.45, 'effect': 0.00},
    'high_school': {'weight': 0.17, 'effect': 0.25},
    'other': {'weight': 0.03, 'effect': 0.10},
}

MARITAL_STATUS = {
    'married': {'weight': 0.45, 'effect': -0.10},
    'single': {'weight': 0.50, 'effect': 0.05},
    'other': {'weight': 0.05, 'effect': 0.15},
}


def _choice(rng: np.random.Generator, levels: dict, n: int) -> np.ndarray:
    names = list(levels)
    weights = np.array([levels[k]['weight'] for k in names])
    return rng.choice(names, size=n, p=weights / weights.sum())


def generate_credit_data(n_rows: int = 5000, seed: int = RANDOM_SEED) -> pd.DataFrame:
    """
    Generate a synthetic credit default dataset.

    Args:
        n_rows: Number of applicants
        seed: Random seed

    Returns:
        DataFrame with one row per applicant
    """
    rng = np.random.default_rng(seed)

    age = rng.integers(21, 75, n_rows)
    income = np.round(rng.lognormal(10.3, 0.5, n_rows), 2)
    credit_limit = np.round(np.clip(income * rng.uniform(0.2, 1.5, n_rows), 1000, None), -2)
    utilization = np.round(rng.beta(2, 5, n_rows), 4)
    months_employed = rng.integers(0, 480, n_rows)
    late_payments = rng.poisson(0.6, n_rows)
    education = _choice(rng, EDUCATION_LEVELS, n_rows)
    marital_status = _choice(rng, MARITAL_STATUS, n_rows)
    gender = rng.choice(['female', 'male'], size=n_rows)

    logit = (
        -1.6
        + 2.2 * (utilization - 0.3)
        + 0.55 * late_payments
        - 0.012 * (age - 40)
        - 0.35 * (np.log(income) - 10.3)
        - 0.0015 * months_employed
        + np.array([EDUCATION_LEVELS[e]['effect'] for e in education])
        + np.array([MARITAL_STATUS[m]['effect'] for m in marital_status])
    )
    default_prob = 1.0 / (1.0 + np.exp(-logit))
    label = (rng.uniform(size=n_rows) < default_prob).astype(int)

    return pd.DataFrame({
        'id': np.arange(1, n_rows + 1),
        'gender': gender,
        'age': age,
        'income': income,
        'credit_limit': credit_limit,
        'utilization': utilization,
        'months_employed': months_employed,
        'late_payments': late_payments,
        'education': education,
        'marital_status': marital_status,
        'label': label,
    })


def main(argv: Optional[list] = None) -> None:
    parser = argparse.ArgumentParser(description='Generate synthetic credit default data')
    parser.add_argument('--rows', type=int, default=5000, help='Number of rows')
    parser.add_argument('--seed', type=int, default=RANDOM_SEED, help='Random seed')
    parser.add_argument(
        '--output', default='data/sample/credit_default.csv',
        help='Output CSV path',
    )
    args = parser.parse_args(argv)

    df = generate_credit_data(args.rows, args.seed)

    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(output, index=False)

    print(f"Wrote {len(df):,} rows to {output} (default rate {df['label'].mean():.1%})")


if __name__ == '__main__':
    main()
