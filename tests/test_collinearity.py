import logging

from planar_sandbox.collinearity import find_collinear_triples, has_collinear_triple, triple_areas


def test_square_has_no_collinear_triple():
    square = [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)]

    report = find_collinear_triples(square, 1e-6)

    assert not report.collinear
    assert report.triples == []
    assert not has_collinear_triple(square, 1e-6)


def test_centre_of_square_lies_on_both_diagonals():
    points = [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0), (0.5, 0.5)]

    report = find_collinear_triples(points, 1e-6)

    assert report.triples == [(0, 2, 4), (1, 3, 4)]


def test_report_tracks_involved_points(caplog):
    points = [(0.0, 0.0), (1.0, 0.0), (2.0, 0.0), (0.0, 1.0), (5.0, 7.0)]

    with caplog.at_level(logging.WARNING, logger="planar_sandbox.collinearity"):
        report = find_collinear_triples(points, 1e-6)

    assert report.triples == [(0, 1, 2)]
    assert report.involves(1)
    assert not report.involves(3)
    assert "collinear" in caplog.text


def test_epsilon_controls_near_collinear_points():
    points = [(0.0, 0.0), (1.0, 0.0), (2.0, 1e-4)]

    assert not has_collinear_triple(points, 1e-6)
    assert has_collinear_triple(points, 1e-3)


def test_fewer_than_three_points_have_no_triples():
    triples, areas = triple_areas([(0.0, 0.0), (1.0, 1.0)])

    assert triples.shape == (0, 3)
    assert areas.shape == (0,)
    assert not find_collinear_triples([(0.0, 0.0)], 1e-6).collinear
