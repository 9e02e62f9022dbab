import json

import numpy as np
import pytest

from hyper4d.shapes import Shape4D, edge_axes, generate_edges, generate_vertices, load_shape


class TestGenerateVertices:
    def test_sixteen_distinct(self):
        vertices = generate_vertices(2.0)
        assert vertices.shape == (16, 4)
        assert len({tuple(v) for v in vertices}) == 16

    @pytest.mark.parametrize("size", [0.5, 1.0, 2.0, 100.0])
    def test_coordinates_are_half_size(self, size):
        vertices = generate_vertices(size)
        assert np.all(np.abs(vertices) == size / 2)

    def test_order_x_outermost(self):
        vertices = generate_vertices(2.0)
        np.testing.assert_array_equal(vertices[0], [-1, -1, -1, -1])
        np.testing.assert_array_equal(vertices[1], [-1, -1, -1, 1])
        np.testing.assert_array_equal(vertices[8], [1, -1, -1, -1])
        np.testing.assert_array_equal(vertices[15], [1, 1, 1, 1])

    def test_zero_size_collapses_to_origin(self):
        vertices = generate_vertices(0.0)
        assert vertices.shape == (16, 4)
        assert np.all(vertices == 0)

    def test_negative_size_rejected(self):
        with pytest.raises(ValueError):
            generate_vertices(-1.0)

    def test_read_only(self):
        vertices = generate_vertices(1.0)
        with pytest.raises(ValueError):
            vertices[0, 0] = 5.0


class TestGenerateEdges:
    def test_thirty_two_edges(self, tesseract):
        assert len(tesseract.edges) == 32

    def test_edges_differ_in_one_coordinate(self, tesseract):
        for i, j in tesseract.edges:
            assert i < j
            assert np.count_nonzero(tesseract.vertices[i] != tesseract.vertices[j]) == 1

    def test_no_duplicates_and_ascending(self, tesseract):
        assert len(set(tesseract.edges)) == 32
        assert tesseract.edges == sorted(tesseract.edges)

    def test_every_vertex_has_four_neighbours(self, tesseract):
        degree = [0] * 16
        for i, j in tesseract.edges:
            degree[i] += 1
            degree[j] += 1
        assert degree == [4] * 16

    def test_vertex_zero_neighbours_differ_by_one_bit(self, tesseract):
        from_zero = [e for e in tesseract.edges if 0 in e]
        assert from_zero == [(0, 1), (0, 2), (0, 4), (0, 8)]
        for i, j in tesseract.edges:
            assert bin(i ^ j).count("1") == 1

    def test_degenerate_size_has_no_edges(self):
        assert generate_edges(generate_vertices(0.0)) == []


class TestEdgeAxes:
    def test_eight_edges_per_axis(self, tesseract):
        axes = edge_axes(tesseract.vertices, tesseract.edges)
        assert len(axes) == 32
        for axis in range(4):
            assert axes.count(axis) == 8

    def test_axis_matches_bit(self, tesseract):
        for (i, j), axis in zip(tesseract.edges, tesseract.axes):
            assert i ^ j == 1 << (3 - axis)


class TestShapeFile:
    def test_save_and_load(self, tesseract, tmp_path):
        path = tmp_path / "tesseract.4ds"
        tesseract.save(str(path))
        loaded = load_shape(str(path))
        np.testing.assert_array_equal(loaded.vertices, tesseract.vertices)
        assert loaded.edges == tesseract.edges

    def test_missing_edges_are_generated(self, tmp_path):
        path = tmp_path / "bare.4ds"
        path.write_text(json.dumps({"vertices": generate_vertices(1.0).tolist()}))
        assert len(load_shape(str(path)).edges) == 32

    def test_bad_vertices_rejected(self, tmp_path):
        path = tmp_path / "bad.4ds"
        path.write_text(json.dumps({"vertices": [[0, 0, 0]]}))
        with pytest.raises(ValueError):
            load_shape(str(path))

    def test_bad_edge_rejected(self, tmp_path):
        path = tmp_path / "bad_edge.4ds"
        path.write_text(json.dumps({"vertices": generate_vertices(1.0).tolist(), "edges": [[3, 99]]}))
        with pytest.raises(ValueError):
            load_shape(str(path))

    def test_tesseract_constructor(self):
        shape = Shape4D.tesseract(4.0)
        assert shape.vertices.max() == 2.0
        assert len(shape.edges) == 32
