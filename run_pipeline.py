"""
QAP GRASP Pipeline

Usage:
    python run_pipeline.py --instance data/instances/nug12.dat
    python run_pipeline.py --instance nug12 --look4 578 --solution data/solutions/nug12.sln
    python run_pipeline.py --random 15 --niter 50 --seed 4711 --save --verbose

Pipeline:
    1. Load QAPLIB instance from data/instances/ (or generate a random one)
    2. Solve with GRASP (randomized greedy construction + 2-exchange local search)
    3. Report best cost, permutation, iterations and next seed
    4. Optionally save the run (and its iteration history) in results/

References:
    - Li, Pardalos & Resende, 1994 (GRASP for the QAP)
    - Resende, Pardalos & Li, 1996 (Algorithm 754)
"""

import os
import sys
import time
import logging
import argparse
from dataclasses import replace

from qapgrasp.core.exceptions import QAPError
from qapgrasp.grasp.config import SELECTION_RULES, default_params, load_params
from qapgrasp.grasp.driver import grasp
from qapgrasp.utils.generators import random_instance
from qapgrasp.utils.metrics import gap
from qapgrasp.utils.qaplib_io import read_qaplib, read_solution
from qapgrasp.utils.save import save_single_run


# --- UTILITY FUNCTIONS ---
def format_time(seconds):
    """Format time in min:sec or just seconds if < 60"""
    if seconds >= 60:
        mins = int(seconds // 60)
        secs = int(seconds % 60)
        return f"{mins}min {secs}s"
    else:
        return f"{seconds:.2f}s"

# --- LOGGING SETUP ---
def get_log_dir(instance_name):
    log_dir = os.path.join("results", "logs", instance_name)
    os.makedirs(log_dir, exist_ok=True)
    return log_dir

# --- LOAD QAP INSTANCE ---
def load_instance(path, distance_first=False):
    """Load a QAPLIB instance. A bare name is looked up in data/instances/."""
    if not os.path.exists(path) and not path.endswith('.dat'):
        path = f"data/instances/{path}.dat"
    return read_qaplib(path, distance_first=distance_first)


def build_params(args, n):
    """Size-adapted defaults < JSON file < explicit command-line flags."""
    params = load_params(args.params, base=default_params(n))
    overrides = {name: getattr(args, name)
                 for name in ("alpha", "beta", "niter", "look4", "seed", "selection")
                 if getattr(args, name) is not None}
    return replace(params, **overrides)


def main():
    parser = argparse.ArgumentParser(description="GRASP for the Quadratic Assignment Problem")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument('--instance', type=str, help='QAPLIB file or instance name')
    source.add_argument('--random', type=int, metavar='N', help='solve a random symmetric instance of size N')
    parser.add_argument('--distance-first', action='store_true',
                        help='the instance file lists the distance matrix first')
    parser.add_argument('--alpha', type=float, default=None, help='construction greediness in (0, 1]')
    parser.add_argument('--beta', type=float, default=None, help='candidate list fraction in (0, 1]')
    parser.add_argument('--niter', type=int, default=None, help='maximum GRASP iterations')
    parser.add_argument('--look4', type=int, default=None, help='stop once a cost <= look4 is found')
    parser.add_argument('--seed', type=int, default=None, help='random seed in [1, 2^31 - 2]')
    parser.add_argument('--selection', choices=SELECTION_RULES, default=None,
                        help="'seed' reproduces Algorithm 754 runs, 'uniform' uses the [0, 1) draw")
    parser.add_argument('--params', type=str, default=None, help='JSON file with GRASP parameters')
    parser.add_argument('--solution', type=str, default=None, help='QAPLIB .sln file to compute the gap')
    parser.add_argument('--save', action='store_true', help='save the run in results/')
    parser.add_argument('--verbose', action='store_true', help='log every iteration')
    args = parser.parse_args()

    try:
        if args.instance:
            problem = load_instance(args.instance, distance_first=args.distance_first)
        else:
            problem = random_instance(args.random, seed=args.seed)
        params = build_params(args, problem.n)
    except (QAPError, OSError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    instance_name = problem.name or "instance"
    log_dir = get_log_dir(instance_name)
    logging.basicConfig(filename=os.path.join(log_dir, "terminal_python_log.txt"), filemode="w",
                        level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(asctime)s %(name)s %(message)s')

    print(f"\nQAP GRASP - {instance_name.upper()} (n={problem.n})")
    logging.info(f"QAP GRASP - {instance_name.upper()} (n={problem.n})")
    print(f"Parameters: alpha={params.alpha} beta={params.beta} niter={params.niter} "
          f"look4={params.look4} seed={params.seed} selection={params.selection}")

    start = time.perf_counter()
    try:
        result = grasp(problem, params)
    except QAPError as e:
        print(f"Error: {e}")
        sys.exit(1)
    elapsed = time.perf_counter() - start

    print("\nRESULT")
    print(f"  Status:       {'TARGET MET' if result.target_met else 'BUDGET EXHAUSTED'}")
    print(f"  Best cost:    {result.cost}")
    print(f"  Permutation:  {' '.join(str(p) for p in result.permutation)}")
    print(f"  Iterations:   {result.iterations}/{params.niter}")
    print(f"  Next seed:    {result.seed}")
    print(f"  Runtime:      {format_time(elapsed)}")
    logging.info(f"Best cost: {result.cost}, iterations: {result.iterations}, runtime: {elapsed:.2f}s")

    if args.solution:
        try:
            best_known, _ = read_solution(args.solution)
        except (QAPError, OSError) as e:
            print(f"Error: {e}")
            sys.exit(1)
        print(f"  Best known:   {best_known} (gap {gap(result.cost, best_known):.2f}%)")
        logging.info(f"Gap to best known {best_known}: {gap(result.cost, best_known):.2f}%")

    if args.save:
        save_single_run(result, instance_name=instance_name, with_history=True)

    print(f"\nDetailed logs: {log_dir}\n")

if __name__ == "__main__":
    main()
