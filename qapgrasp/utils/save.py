import os
import pandas as pd
from datetime import datetime



def save_multiple_runs(costs_dict, instance_name="instance", folder="results"):
    """
    Save several cost series (one per method or parameter set) to separate CSV files.

    Args:
        costs_dict (dict): {method_name: [costs...]}
        instance_name (str): QAP instance name
        folder (str): root folder

    Returns:
        list of written paths
    """
    os.makedirs(os.path.join(folder, instance_name), exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    paths = []
    for method, costs in costs_dict.items():
        df = pd.DataFrame({method: costs})
        filename = f"costs_{method}_{timestamp}.csv"
        full_path = os.path.join(folder, instance_name, filename)
        df.to_csv(full_path, index=False)
        print(f" Saved: {full_path}")
        paths.append(full_path)
    return paths

def save_single_run(result, instance_name="instance", method="grasp", folder="results", with_history=False):
    """
    Save one GRASP run (method, cost, permutation, iterations, seed).

    Args:
        result (GraspResult): solver output
        instance_name (str): QAP instance name
        method (str): method label
        folder (str): output folder
        with_history (bool): also write the per-iteration history

    Returns:
        path of the run file
    """
    os.makedirs(os.path.join(folder, instance_name), exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    df = pd.DataFrame({
        "method": [method],
        "cost": [result.cost],
        "permutation": [" ".join(str(p) for p in result.permutation)],
        "iterations": [result.iterations],
        "target_met": [result.target_met],
        "seed": [result.seed],
        "timestamp": [timestamp]
    })
    filename = f"single_run_{method}_{timestamp}.csv"
    full_path = os.path.join(folder, instance_name, filename)
    df.to_csv(full_path, index=False)
    print(f" Run saved: {full_path}")
    if with_history:
        history_path = os.path.join(folder, instance_name, f"history_{method}_{timestamp}.csv")
        result.to_frame().to_csv(history_path, index=False)
        print(f" History saved: {history_path}")
    return full_path
