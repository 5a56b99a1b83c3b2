import pytest

from densfn.config import (
    ConfigError,
    Experiment,
    FrameworkParameters,
    load_input,
    read_experiment,
    read_framework_parameters,
    read_v,
)
from densfn.lattice import Point3

FRAMEWORK_ROWS = [
    ("Input_Dir", "/data/in/"),
    ("Output_Dir", "/data/out/"),
    ("T2_Dir", "/data/t2/"),
    ("T2L_Dir", "/data/t2l/"),
    ("Input_File", "global.csv"),
    ("Experiment_File", "experiment.csv"),
    ("V_File", "v.csv"),
    ("Replot", "0"),
    ("Extract_Data", "1"),
    ("Sample_Rate", "250"),
    ("Densigram", "1"),
    ("Plot_Graph", "0"),
    ("Zero_Density", "1"),
    ("Title", "1"),
    ("Title_Str", "My Title"),
    ("Extract_Experiment_Data", "0"),
    ("Plot_Experiments", "0"),
    ("Time_Vary_k", "0"),
    ("Time_Vary_m", "1"),
    ("Vary_k", "0"),
    ("Vary_m", "1"),
    ("UplusV", "0"),
    ("Superimposed", "1"),
    ("Use_Threads_1", "0"),
    ("Use_Threads_2", "1"),
    ("Num_Threads", "8"),
    ("T2", "1"),
    ("T2L", "0"),
    ("Type_Of_Experiment", "Molecule_Centres"),
    ("Experimental_T2", "1"),
    ("Experimental_T2_Label", "b2"),
    ("T2_Start_Index", "5"),
]


def _write_framework(path, rows):
    path.write_text("\n".join(f"{k},{v}" for k, v in rows) + "\n", encoding="utf-8")
    return path


def test_read_framework_parameters_all_fields(tmp_path):
    f_p = read_framework_parameters(_write_framework(tmp_path / "fp.csv", FRAMEWORK_ROWS))
    assert f_p.input_dir == "/data/in/"
    assert f_p.output_dir == "/data/out/"
    assert f_p.t2l_dir == "/data/t2l/"
    assert f_p.v_file == "v.csv"
    assert f_p.replot is False
    assert f_p.extract_data is True
    assert f_p.sample_rate == 250
    assert f_p.title_str == "My Title"
    assert f_p.time_vary_m is True
    assert f_p.num_threads == 8
    assert f_p.t2 is True and f_p.t2l is False
    assert f_p.type_of_experiment == "Molecule_Centres"
    assert f_p.experimental_t2_label == "b2"
    assert f_p.t2_start_index == 5


def test_read_framework_parameters_lenient_integers(tmp_path):
    rows = list(FRAMEWORK_ROWS)
    rows[9] = ("Sample_Rate", " 42 samples")
    rows[7] = ("Replot", "3")
    f_p = read_framework_parameters(_write_framework(tmp_path / "fp.csv", rows))
    assert f_p.sample_rate == 42
    assert f_p.replot is True


def test_read_framework_parameters_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="Framework parameters file not found!"):
        read_framework_parameters(tmp_path / "absent.csv")


def test_read_framework_parameters_truncated(tmp_path):
    path = _write_framework(tmp_path / "fp.csv", FRAMEWORK_ROWS[:10])
    with pytest.raises(ConfigError):
        read_framework_parameters(path)


def test_read_framework_parameters_bad_integer(tmp_path):
    rows = list(FRAMEWORK_ROWS)
    rows[25] = ("Num_Threads", "many")
    with pytest.raises(ConfigError):
        read_framework_parameters(_write_framework(tmp_path / "fp.csv", rows))


def _params(tmp_path, **overrides):
    return FrameworkParameters(input_dir=str(tmp_path) + "/", **overrides)


def test_read_experiment(tmp_path):
    (tmp_path / "exp.csv").write_text("1,2,4,8\n3,5,\n10\n", encoding="utf-8")
    experiment = read_experiment(_params(tmp_path, experiment_file="exp.csv"))
    assert experiment == Experiment(motif_sizes=[1, 2, 4, 8], k=[3, 5], repetitions=10)


def test_read_experiment_missing(tmp_path):
    with pytest.raises(ConfigError, match="Experiment file not found!"):
        read_experiment(_params(tmp_path, experiment_file="nope.csv"))


def test_read_experiment_missing_repetitions(tmp_path):
    (tmp_path / "exp.csv").write_text("1,2\n3\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        read_experiment(_params(tmp_path, experiment_file="exp.csv"))


def _write_structure(tmp_path):
    (tmp_path / "global.csv").write_text("cell.csv,\nfrac.csv,\nnames.csv\n", encoding="utf-8")
    (tmp_path / "cell.csv").write_text("10,11.5,12,90,95.5,120\n", encoding="utf-8")
    (tmp_path / "frac.csv").write_text("0,0,0\n0.25,0.5,0.75\n", encoding="utf-8")
    (tmp_path / "names.csv").write_text("Data/out.txt\nGraphs/out.pdf\n", encoding="utf-8")


def test_load_input(tmp_path):
    _write_structure(tmp_path)
    inp = load_input(_params(tmp_path), "global.csv")
    assert (inp.cell_param_a, inp.cell_param_b, inp.cell_param_c) == (10, 11.5, 12)
    assert (inp.cell_param_alpha, inp.cell_param_beta, inp.cell_param_gamma) == (90, 95.5, 120)
    assert inp.frac_base_pts == [Point3(0, 0, 0), Point3(0.25, 0.5, 0.75)]
    assert inp.data_file == "Data/out.txt"
    assert inp.graph_file == "Graphs/out.pdf"


def test_load_input_missing_global(tmp_path):
    with pytest.raises(ConfigError, match="Global file not found!"):
        load_input(_params(tmp_path), "global.csv")


def test_load_input_missing_cell(tmp_path):
    _write_structure(tmp_path)
    (tmp_path / "cell.csv").unlink()
    with pytest.raises(ConfigError, match="Cell file not found!"):
        load_input(_params(tmp_path), "global.csv")


def test_load_input_missing_coordinates(tmp_path):
    _write_structure(tmp_path)
    (tmp_path / "frac.csv").unlink()
    with pytest.raises(ConfigError, match="Frac_Coords file not found!"):
        load_input(_params(tmp_path), "global.csv")


def test_load_input_missing_names(tmp_path):
    _write_structure(tmp_path)
    (tmp_path / "names.csv").unlink()
    with pytest.raises(ConfigError, match="File_Names file not found!"):
        load_input(_params(tmp_path), "global.csv")


def test_load_input_bad_coordinate(tmp_path):
    _write_structure(tmp_path)
    (tmp_path / "frac.csv").write_text("0,0,zero\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_input(_params(tmp_path), "global.csv")


def test_read_v(tmp_path):
    (tmp_path / "v.csv").write_text("0.1,0.2,0.3\n-0.5,0,1e-2\n", encoding="utf-8")
    assert read_v(_params(tmp_path), "v.csv") == [
        Point3(0.1, 0.2, 0.3),
        Point3(-0.5, 0, 1e-2),
    ]


def test_read_v_missing(tmp_path):
    with pytest.raises(ConfigError, match="V not found!"):
        read_v(_params(tmp_path), "v.csv")