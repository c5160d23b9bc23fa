#!/usr/bin/env python3
"""
Multi-run benchmark script for QAP GRASP
========================================

Runs GRASP ``n_runs`` times for each alpha value on one instance. Runs are
chained: every run starts from the seed returned by the previous one, so the
whole benchmark is reproducible from a single initial seed.

Usage:
    python run_all.py --instance data/instances/nug12.dat --n_runs 15
    python run_all.py --random 20 --alphas 0.1 0.5 1.0

This script will:
1. Run GRASP n_runs times per alpha value
2. Print best / mean / worst cost per alpha
3. Save one CSV cost series per alpha in results/<instance>/
"""

import sys
import logging
import argparse
from datetime import datetime

from qapgrasp.core.exceptions import QAPError
from qapgrasp.grasp.config import default_params
from qapgrasp.grasp.driver import grasp
from qapgrasp.utils.generators import random_instance
from qapgrasp.utils.qaplib_io import read_qaplib
from qapgrasp.utils.save import save_multiple_runs


def run_benchmark(problem, alphas, n_runs, seed, niter=None, folder="results"):
    """
    Returns:
        {label: [best cost of each run]}
    """
    costs = {}
    for alpha in alphas:
        label = f"alpha{alpha}"
        params = default_params(problem.n, alpha=alpha, seed=seed)
        if niter is not None:
            params.niter = niter
        costs[label] = []
        for run in range(n_runs):
            result = grasp(problem, params)
            costs[label].append(result.cost)
            logging.info(f"[BENCH] {label} run {run + 1}/{n_runs}: cost={result.cost} seed={params.seed}")
            params.seed = result.seed
    save_multiple_runs(costs, instance_name=problem.name or "instance", folder=folder)
    return costs


def main():
    parser = argparse.ArgumentParser()
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--instance", type=str)
    source.add_argument("--random", type=int, metavar="N")
    parser.add_argument("--n_runs", type=int, default=15)
    parser.add_argument("--alphas", type=float, nargs="+", default=[0.1, 0.25, 0.5])
    parser.add_argument("--niter", type=int, default=None)
    parser.add_argument("--seed", type=int, default=270001)
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format='%(asctime)s %(message)s')

    try:
        if args.instance:
            problem = read_qaplib(args.instance)
        else:
            problem = random_instance(args.random, seed=args.seed)

        print("=" * 60)
        print(f"QAP GRASP BENCHMARK - {problem.name} (n={problem.n})")
        print("=" * 60)
        print(f"Alphas: {args.alphas}")
        print(f"Protocol: {args.n_runs} chained runs per alpha")
        print()

        start_time = datetime.now()
        costs = run_benchmark(problem, args.alphas, args.n_runs, args.seed, niter=args.niter)
        duration = datetime.now() - start_time

        print()
        for label, series in costs.items():
            print(f"  {label:10s} best={min(series)} mean={sum(series) / len(series):.1f} worst={max(series)}")
        print(f"Duration: {duration}")
        print("=" * 60)

    except (QAPError, OSError) as e:
        print(f"Error during benchmark execution: {e}")
        sys.exit(1)

if __name__ == "__main__":
    main()
