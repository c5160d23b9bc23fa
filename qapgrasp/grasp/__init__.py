from .config import GraspParams, default_params, load_params
from .candidates import CandidateEntry, build_candidate_list
from .constructive import Construction, construct, stage1, stage2
from .local_search import swap_gain, placement_from, two_exchange_sweep
from .driver import GraspResult, IterationRecord, grasp, solve
