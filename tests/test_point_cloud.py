import random

import pytest

from densfn.cif import CifError, read_atom_coords, read_cell_shape, read_cif
from densfn.config import ConfigError, FrameworkParameters, Input
from densfn.lattice import Point3, frac_to_cart, lattice_vectors, transformation_matrix
from densfn.point_cloud import (
    add_random_points,
    initialise_custom,
    initialise_pt_cloud,
    initialise_t2,
    initialise_t2l,
)
from densfn.t2 import base_points_from_atoms, experimental_cell_shape, experimental_points

IDENTITY = ((1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0))
DOUBLE = ((2.0, 0.0, 0.0), (0.0, 2.0, 0.0), (0.0, 0.0, 2.0))


def test_random_points_count_and_range():
    inp = Input(random_pts=25)
    pts = add_random_points(inp, random.Random(3))
    assert len(pts) == 25
    assert inp.frac_random_pts == pts
    for p in pts:
        for c in p:
            assert 0 <= c < 1
            assert abs(c * 10000 - round(c * 10000)) < 1e-6


def test_random_points_reproducible_and_replaced():
    a = Input(random_pts=5)
    b = Input(random_pts=5, frac_random_pts=[Point3(9, 9, 9)])
    assert add_random_points(a, random.Random(7)) == add_random_points(b, random.Random(7))
    assert Point3(9, 9, 9) not in b.frac_random_pts


def test_custom_concatenates_base_and_random():
    inp = Input(
        frac_base_pts=[Point3(0.1, 0.2, 0.3)],
        frac_random_pts=[Point3(0.4, 0.5, 0.6)],
        matrix=DOUBLE,
    )
    pts = initialise_custom(inp, False)
    assert pts == [frac_to_cart(DOUBLE, Point3(0.1, 0.2, 0.3)), frac_to_cart(DOUBLE, Point3(0.4, 0.5, 0.6))]
    assert inp.base_pts == pts


def test_custom_uplusv_wraps_into_cell():
    inp = Input(
        frac_base_pts=[Point3(0.9, 0.1, 0.5), Point3(0.2, 0.8, 0.0)],
        frac_v=[Point3(0.3, -0.4, 0.7), Point3(0.0, 0.0, 0.0), Point3(-1.5, 0.25, 0.1)],
        matrix=IDENTITY,
    )
    for rep in (0, 1):
        inp.rep_iter = rep
        pts = initialise_custom(inp, True)
        assert len(pts) == 6
        for p in pts:
            for c in p:
                assert 0 <= c < 1


def test_custom_uplusv_add_and_subtract():
    inp = Input(frac_base_pts=[Point3(0.5, 0.5, 0.5)], frac_v=[Point3(0.25, 0.0, 0.0)], matrix=IDENTITY)
    inp.rep_iter = 0
    (added,) = initialise_custom(inp, True)
    inp.rep_iter = 1
    (subtracted,) = initialise_custom(inp, True)
    assert added.x == pytest.approx(0.75)
    assert subtracted.x == pytest.approx(0.25)
    assert added.y == subtracted.y == 0.5


def test_custom_without_matrix_raises():
    with pytest.raises(ValueError):
        initialise_custom(Input(frac_base_pts=[Point3(0, 0, 0)]), False)


def test_dispatch_to_custom():
    f_p = FrameworkParameters()
    inp = Input(frac_base_pts=[Point3(0.5, 0, 0)], matrix=DOUBLE)
    assert initialise_pt_cloud(f_p, inp, 0, False) == [frac_to_cart(DOUBLE, Point3(0.5, 0, 0))]


def test_t2_experimental():
    f_p = FrameworkParameters(t2=True, experimental_t2=True, experimental_t2_label="a",
                              type_of_experiment="Molecule_Centres")
    inp = Input()
    pts = initialise_pt_cloud(f_p, inp, 0, False)
    matrix = transformation_matrix(experimental_cell_shape("a"))
    assert pts == experimental_points("a", "Molecule_Centres", matrix)
    assert inp.lattice_vectors == lattice_vectors(matrix)


def _cif_text(n_atoms):
    rows = "\n".join(f"{i / 100:.2f} {(i % 7) / 10:.2f} 0.5" for i in range(n_atoms))
    return (
        "data_global\n_dummy 1\n"
        "data_entry\n"
        "_cell_length_a 10\n_cell_length_b 10\n_cell_length_c 10\n"
        "_cell_angle_alpha 90\n_cell_angle_beta 90\n_cell_angle_gamma 90\n"
        "loop_\n_atom_site_fract_x\n_atom_site_fract_y\n_atom_site_fract_z\n"
        f"{rows}\n"
    )


def test_t2_from_cif(tmp_path):
    path = tmp_path / "T2_5_num_molGeom.cif"
    path.write_text(_cif_text(46))
    f_p = FrameworkParameters(t2=True, t2_dir=str(tmp_path) + "/", type_of_experiment="Molecule_Centres")
    inp = Input()
    pts = initialise_t2(f_p, inp, 5)
    block = read_cif(path)[1]
    matrix = transformation_matrix(read_cell_shape(block))
    expected = base_points_from_atoms(read_atom_coords(block, matrix), "Molecule_Centres")
    assert pts == expected
    assert len(pts) == 1
    assert len(inp.lattice_vectors) == 3


def test_t2_needs_second_block(tmp_path):
    (tmp_path / "T2_2_num_molGeom.cif").write_text("data_only\n_x 1\n")
    f_p = FrameworkParameters(t2=True, t2_dir=str(tmp_path) + "/")
    with pytest.raises(CifError):
        initialise_t2(f_p, Input(), 2)


def _write_t2l(tmp_path, label):
    lines = ["10,0,0", "0,10,0", "0,0,10", "h1", "h2", "h3"]
    for i in range(46):
        atom_type = "O" if i < 2 else "C"
        lines.append(f"{i},{atom_type},0.1,0.2,0.3,0")
    (tmp_path / f"job_0{label}.csv").write_text("\n".join(lines) + "\n")


@pytest.mark.parametrize(
    "experiment,count",
    [("Molecule_Centres", 1), ("Centres_Plus_Ox", 3), ("Other", 0)],
)
def test_t2l_point_counts(tmp_path, experiment, count):
    _write_t2l(tmp_path, "1234")
    f_p = FrameworkParameters(t2l=True, t2l_dir=str(tmp_path) + "/", type_of_experiment=experiment)
    inp = Input(t2l_label="1234")
    pts = initialise_pt_cloud(f_p, inp, 0, False)
    assert len(pts) == count


def test_t2l_centre_is_mean(tmp_path):
    _write_t2l(tmp_path, "0001")
    f_p = FrameworkParameters(t2l=True, t2l_dir=str(tmp_path) + "/", type_of_experiment="Centres_Plus_Ox")
    inp = Input(t2l_label="0001")
    pts = initialise_t2l(f_p, inp)
    atom = frac_to_cart(inp.matrix, (0.1, 0.2, 0.3))
    assert tuple(pts[0]) == pytest.approx(tuple(atom))
    assert pts[1] == atom
    assert inp.lattice_vectors == lattice_vectors(inp.matrix)


def test_t2l_matrix_columns(tmp_path):
    lines = ["1,2,3", "4,5,6", "7,8,9", "", "", ""]
    (tmp_path / "job_0abcd.csv").write_text("\n".join(lines) + "\n")
    f_p = FrameworkParameters(t2l_dir=str(tmp_path) + "/", type_of_experiment="Molecule_Centres")
    inp = Input(t2l_label="abcd")
    assert initialise_t2l(f_p, inp) == []
    assert inp.matrix[1][0] == 2
    assert inp.matrix[0][1] == 4
    assert inp.matrix[2][2] == 9


def test_t2l_missing_file(tmp_path):
    f_p = FrameworkParameters(t2l_dir=str(tmp_path) + "/")
    with pytest.raises(ConfigError):
        initialise_t2l(f_p, Input(t2l_label="none"))