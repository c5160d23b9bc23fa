"""
Unit tests for GRASP parameters.
"""
import json
import numpy as np
import pytest
from qapgrasp.core.exceptions import InvalidParameterError
from qapgrasp.grasp.config import (GraspParams, PARAMS, classify, default_params, load_params,
                                   single_precision_count)

def test_classify_sizes():
    assert classify(12) == 'small'
    assert classify(30) == 'medium'
    assert classify(100) == 'large'
    assert classify(256) == 'xlarge'

def test_default_params_follow_size_table():
    p = default_params(64, seed=99)
    assert p.niter == PARAMS['large'].niter
    assert p.seed == 99

def test_valid_params_pass():
    p = GraspParams(alpha=1.0, beta=1.0, niter=1, seed=1)
    assert p.validate(2) is p

@pytest.mark.parametrize("kwargs", [
    {"alpha": 0.0}, {"alpha": 1.5}, {"beta": 0.0}, {"beta": 1.01},
    {"niter": 0}, {"niter": 2.5}, {"seed": 0}, {"seed": 2**31 - 1},
    {"selection": "random"},
])
def test_invalid_params_fail_fast(kwargs):
    with pytest.raises(InvalidParameterError):
        GraspParams(**kwargs).validate(10)

def test_empty_candidate_list_is_rejected():
    # beta * (n^2 - n) = 0.8 keeps no candidate
    with pytest.raises(InvalidParameterError):
        GraspParams(beta=0.4).validate(2)
    with pytest.raises(InvalidParameterError):
        GraspParams().validate(1)

def test_load_params_overlays_json(tmp_path):
    path = tmp_path / "params.json"
    path.write_text(json.dumps({"alpha": 0.5, "niter": 7}), encoding="utf-8")
    p = load_params(str(path))
    assert p.alpha == 0.5 and p.niter == 7
    assert p.beta == GraspParams().beta

def test_load_params_missing_file_gives_defaults(tmp_path):
    assert load_params(str(tmp_path / "nope.json")) == GraspParams()
    base = GraspParams(niter=3)
    assert load_params(None, base=base) is base

def test_load_params_rejects_unknown_keys(tmp_path):
    path = tmp_path / "params.json"
    path.write_text(json.dumps({"gamma": 1}), encoding="utf-8")
    with pytest.raises(InvalidParameterError):
        load_params(str(path))

def test_numpy_integers_are_accepted_and_stored_as_int():
    p = GraspParams(niter=np.int64(5), seed=np.int32(7), look4=np.int64(22)).validate(4)
    assert (p.niter, p.seed, p.look4) == (5, 7, 22)
    assert all(type(v) is int for v in (p.niter, p.seed, p.look4))
    with pytest.raises(InvalidParameterError):
        GraspParams(look4=True).validate(4)

def test_counts_use_single_precision_products():
    # 0.1 * 0.7 * 600 truncates to 41 in double precision but 42 in float32
    assert int(0.1 * 0.7 * 600) == 41
    assert single_precision_count(0.1, 0.7, 600) == 42
    assert single_precision_count(0.5, 30) == 15
    assert GraspParams(beta=0.7).candidate_count(25) == 420
