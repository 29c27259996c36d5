import numpy as np
import pytest

from pbfluid.neighbors import NeighborId, NeighborhoodSearch


def test_close_points_are_neighbors_and_self_is_excluded():
    search = NeighborhoodSearch(0.2)
    sid = search.add_point_set(np.array([[0.0, 0, 0], [0.1, 0, 0], [1.0, 0, 0]]))
    search.find_neighbors()
    ps = search.point_set(sid)
    assert ps.neighbors(0) == [NeighborId(0, 1)]
    assert ps.neighbors(1) == [NeighborId(0, 0)]
    assert ps.neighbors(2) == []


def test_neighbors_across_point_sets():
    search = NeighborhoodSearch(0.2)
    fluid = search.add_point_set(np.array([[0.0, 0, 0]]))
    wall = search.add_point_set(np.array([[0.0, 0.1, 0], [0.0, 5.0, 0]]), False, False)
    search.find_neighbors()
    assert search.point_set(fluid).neighbors(0) == [NeighborId(wall, 0)]
    assert search.point_set(wall).neighbors(0) == []


def test_disabled_set_gets_empty_lists():
    search = NeighborhoodSearch(0.5)
    sid = search.add_point_set(np.zeros((3, 3)))
    search.find_neighbors()
    assert len(search.point_set(sid).neighbors(0)) == 2
    search.point_set(sid).enable_neighborsearch(False)
    search.find_neighbors()
    assert search.point_set(sid).neighbors(0) == []


def test_in_place_updates_are_seen():
    positions = np.array([[0.0, 0, 0], [3.0, 0, 0]])
    search = NeighborhoodSearch(0.2)
    search.add_point_set(positions)
    search.find_neighbors()
    assert search.point_set(0).neighbors(0) == []
    positions[1] = [0.05, 0, 0]
    search.find_neighbors()
    assert search.point_set(0).neighbors(0) == [NeighborId(0, 1)]


def test_relation_is_symmetric_and_within_radius():
    rng = np.random.default_rng(3)
    a = rng.random((40, 3))
    b = rng.random((25, 3))
    radius = 0.25
    search = NeighborhoodSearch(radius)
    search.add_point_set(a)
    search.add_point_set(b)
    search.find_neighbors()
    sets = [a, b]
    for sid, pos in enumerate(sets):
        for i in range(len(pos)):
            for nid in search.point_set(sid).neighbors(i):
                other = sets[nid.point_set_id][nid.point_id]
                assert np.linalg.norm(pos[i] - other) < radius
                assert NeighborId(sid, i) in search.point_set(nid.point_set_id).neighbors(nid.point_id)


def test_bad_shape_and_radius_are_rejected():
    with pytest.raises(ValueError):
        NeighborhoodSearch(0.0)
    search = NeighborhoodSearch(1.0)
    with pytest.raises(ValueError):
        search.add_point_set(np.zeros((4, 2)))
    with pytest.raises(IndexError):
        search.point_set(0)