import pytest
from shadermodules import (
    ShaderModule, ShaderModuleRegistry, compute_depth_map, get_dependency_graph,
    ShaderModuleCycleError
)


def test_depth_map_example(graph):
    result = compute_depth_map([graph['project64'], graph['project']])
    assert result == {'fp32': 2, 'project': 1, 'fp64': 1, 'project64': 0}

def test_get_dependency_graph_fills_accumulator(graph):
    result = {}
    returned = get_dependency_graph([graph['project64'], graph['project']], level=0, result=result)
    assert returned is result
    assert result == {'fp32': 2, 'project': 1, 'fp64': 1, 'project64': 0}

def test_depth_keeps_maximum_regardless_of_order():
    c = ShaderModule('c')
    b = ShaderModule('b', [c])
    a = ShaderModule('a', [b, c])
    # c is seen at depth 1 (via a) and depth 2 (via a -> b)
    assert compute_depth_map([a])['c'] == 2
    assert compute_depth_map([c, a]) == {'c': 2, 'a': 0, 'b': 1}

def test_depth_is_raised_by_later_roots():
    shallow = ShaderModule('shallow')
    mid = ShaderModule('mid', [shallow])
    deep = ShaderModule('deep', [mid])
    result = compute_depth_map([shallow, mid, deep])
    assert result == {'shallow': 2, 'mid': 1, 'deep': 0}

def test_existing_levels_are_never_lowered(graph):
    result = {'fp32': 7}
    get_dependency_graph([graph['project']], level=0, result=result)
    assert result == {'fp32': 7, 'project': 0}

def test_base_level_offsets_all_levels(graph):
    result = compute_depth_map([graph['project64']], base_level=3)
    assert result == {'project64': 3, 'project': 4, 'fp32': 5, 'fp64': 4}

def test_negative_base_level_rejected(graph):
    with pytest.raises(ValueError):
        compute_depth_map([graph['fp32']], base_level=-1)

def test_depth_map_empty():
    assert compute_depth_map([]) == {}

def test_depth_map_deterministic(graph):
    roots = [graph['project'], graph['project64']]
    assert compute_depth_map(roots) == compute_depth_map(roots)

def test_depth_map_wide_shared_graph():
    # Every layer depends on both modules of the layer below; 2**30 paths.
    layers = [[ShaderModule('l0a'), ShaderModule('l0b')]]
    for i in range(1, 31):
        below = layers[-1]
        layers.append([ShaderModule(f'l{i}a', below), ShaderModule(f'l{i}b', below)])
    result = compute_depth_map(layers[-1])
    assert result['l0a'] == 30
    assert result['l30a'] == 0

def test_depth_map_cycle_raises():
    registry = ShaderModuleRegistry([
        ShaderModule('a', ['b']),
        ShaderModule('b', ['a']),
    ])
    with pytest.raises(ShaderModuleCycleError) as excinfo:
        compute_depth_map(['a'], registry=registry)
    assert excinfo.value.cycle == ['a', 'b', 'a']

def test_depth_map_deep_chain():
    prev = ShaderModule('n0')
    for i in range(1, 5000):
        prev = ShaderModule(f'n{i}', [prev])
    result = compute_depth_map([prev])
    assert result['n4999'] == 0
    assert result['n0'] == 4999
    assert len(result) == 5000
