# densfn

Tools for periodic point sets in three dimensions and the density functions
computed from them: setting up the motif and lattice, reading the input
files, combining computed volumes into density functions, and producing
gnuplot scripts for the graphs.

## Modules

- **`densfn.lattice`**: `Point3` (a 3D point with vector arithmetic and
  `squared_distance`), `CellShape` (cell lengths and angles, with `volume`,
  `items()` and `from_pairs()`), `transformation_matrix`, `frac_to_cart`,
  `lattice_vectors`, `initialise_lattice`, `surrounding_cloud` (all periodic
  neighbours of one motif point within `perim` cells, sorted by squared
  distance) and `preset_parameters` (homometric, FCC and HCP presets).
- **`densfn.config`**: `read_framework_parameters(path)` reads the
  `key,value` settings file into `FrameworkParameters`; `read_experiment`
  gives an `Experiment` (motif sizes, zone orders, repetitions); `load_input`
  reads an `Input` from a global file naming its cell file, fractional
  coordinates file and output-name file; `read_v` reads displacement vectors.
  Missing or malformed files raise `ConfigError`.
- **`densfn.cif`**: a small CIF reader. `parse_cif` and `read_cif` return the
  data blocks as `CifBlock` objects; `CifBlock.find(tags)` returns rows of
  values from a loop or from single pairs. `read_cell_shape` and
  `read_atom_coords` extract the cell and the Cartesian atom positions.
  Problems raise `CifError`.
- **`densfn.t2`**: built-in cell shapes and molecule-centre / oxygen positions
  of the experimental T2 forms (`experimental_cell_shape`,
  `experimental_points`), motif points taken from an atom cloud
  (`base_points_from_atoms`) and labels of T2L files in a directory
  (`read_t2l_labels`).
- **`densfn.point_cloud`**: building Cartesian base points for custom inputs
  (`initialise_custom`, optionally shifted by every vector of `frac_v`), T2
  crystals (`initialise_t2`, experimental or from `T2_<index>_num_molGeom.cif`)
  and T2L crystals (`initialise_t2l`), chosen by `initialise_pt_cloud`;
  `add_random_points` adds random fractional points.
- **`densfn.naming`**: `graph_title`, `plot_file_names` (returning
  `PlotFiles`) and `data_file_name`.
- **`densfn.results`**: `combine_results` turns "at least k" volumes into
  exact density functions or densigrams, optionally with the zeroth density
  function; `write_results` and `combine_and_write` save them as
  comma-separated data; `replot_max_radius` reads the largest final radius
  back; `format_timing` formats a runtime report.
- **`densfn.plotting`**: `graph_script`, `experiment_script` and
  `experiment_scripts` build gnuplot scripts as text; `write_script` saves
  one to a file.

## Example

```python
from densfn.lattice import transformation_matrix, lattice_vectors
from densfn.t2 import experimental_cell_shape, experimental_points

cell = experimental_cell_shape("a")
matrix = transformation_matrix(cell)

for v in lattice_vectors(matrix):
    print(v)

centres = experimental_points("a", "Molecule_Centres", matrix)
print(len(centres), "molecule centres")
```

Reading a CIF block:

```python
from densfn.cif import read_cif, read_cell_shape, read_atom_coords
from densfn.lattice import transformation_matrix

blocks = read_cif("structure.cif")
block = blocks[1]
matrix = transformation_matrix(read_cell_shape(block))
atoms = read_atom_coords(block, matrix)
```

## What it does not do

- It does not compute the zone volumes themselves; `combine_results` expects
  the per-radius volumes and cell volumes to be supplied.
- It does not run gnuplot. The plotting functions return script text, which
  `write_script` saves for you to run yourself.
- There is no command-line program; everything is used from Python.

## Requirements

Python 3.10 or later. The package uses only the standard library; the tests
use pytest (`pip install densfn[test]`).