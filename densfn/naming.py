"""Titles and file names for the data and graphs of a run."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

_EXPERIMENTAL_NAMES = {
    "a": "Alpha",
    "b": "Beta",
    "b2": "Beta2",
    "c": "Gamma",
    "d": "Delta",
    "e": "Epsilon",
}

_EXPERIMENTAL_SYMBOLS = {
    "a": "{/Symbol a}",
    "b": "{/Symbol b}",
    "b2": "{/Symbol b}''",
    "c": "{/Symbol g}",
    "d": "{/Symbol d}",
    "e": "{/Symbol e}",
}

# Predicted T2 entry compared with each experimental form.
_MATCHING_ENTRIES = {"a": 99, "b": 28, "b2": 9, "c": 62, "d": 9, "e": 1}


@dataclass(frozen=True)
class PlotFiles:
    """Data files to plot and the graph file to write, relative to the output directory."""

    data_file_1: str = ""
    data_file_2: str = ""
    graph_file: str = ""


def graph_title(f_p: Any, input: Any, index: int) -> str:
    """Title of the density-function graph; empty for an unknown experimental label."""
    if f_p.t2:
        if not f_p.experimental_t2:
            return f"Density Functions for T2 Entry {index}"
        label = f_p.experimental_t2_label
        if label not in _EXPERIMENTAL_SYMBOLS:
            return ""
        title = f"Density Functions for T2-{_EXPERIMENTAL_SYMBOLS[label]}"
        if f_p.superimposed:
            title += f" and Entry {_MATCHING_ENTRIES[label]}"
        return title
    if input.fcc:
        return "Density Functions for FCC and HCP" if f_p.superimposed else "Density Functions for FCC"
    if input.hcp:
        return "Density Functions for HCP"
    if input.homometric:
        return f"Density Functions for u = {input.u:f}"
    return f_p.title_str


def plot_file_names(f_p: Any, input: Any) -> PlotFiles:
    """The data files and graph file used when plotting this run."""
    data_1 = data_2 = graph = ""
    if f_p.t2:
        if f_p.experimental_t2:
            name = _EXPERIMENTAL_NAMES.get(f_p.experimental_t2_label)
            if name is not None:
                data_1 = f"Data/Experimental_T2/{name}.txt"
                suffix = "_Sup" if f_p.superimposed else ""
                graph = f"Graphs/Experimental_T2/{name}{suffix}.pdf"
        else:
            data_1 = f"Data/T2/{input.rep_iter}.txt"
            graph = f"Graphs/T2/{input.rep_iter}.pdf"
    elif f_p.t2l:
        if f_p.type_of_experiment == "Molecule_Centres":
            data_1 = f"{f_p.output_dir}Data/T2L/T2L_Centres_0{input.t2l_label}.csv"
            graph = f"Graphs/T2L/T2L_Centres_0{input.t2l_label}.pdf"
        elif f_p.type_of_experiment == "Centres_Plus_Ox":
            data_1 = f"{f_p.output_dir}Data/T2L_CO/T2L_CO_0{input.t2l_label}.csv"
            graph = f"Graphs/T2L_CO/T2L_CO_0{input.t2l_label}.pdf"
    elif input.fcc:
        data_1 = "Data/Custom/FCC.txt"
        graph = "Graphs/Custom/FCC.pdf"
    elif input.hcp:
        data_1 = "Data/Custom/HCP.txt"
        graph = "Graphs/Custom/HCP.pdf"
    elif input.homometric:
        data_1 = "Data/Custom/Homometric/Density Functions/0.3.txt"
        graph = "Graphs/Custom/Homometric/Density Functions/Superimposed/0.3.pdf"
        if f_p.superimposed:
            data_2 = "Data/Custom/Homometric/Density Functions/-0.3.txt"
    else:
        data_1 = "Data/Custom.txt"
        graph = "Graphs/Custom.pdf"

    if f_p.superimposed:
        if f_p.t2 and f_p.experimental_t2:
            entry = _MATCHING_ENTRIES.get(f_p.experimental_t2_label)
            if entry is not None:
                data_2 = f"Data/T2/{entry}.txt"
        if input.fcc:
            data_2 = "Data/Custom/HCP.txt"
            graph = "Graphs/Custom/FCCHCP.pdf"
    return PlotFiles(data_1, data_2, graph)


def data_file_name(f_p: Any, input: Any, index: int) -> str:
    """Full path of the data file written for this run; empty if none applies."""
    out = f_p.output_dir
    if f_p.t2:
        if not f_p.experimental_t2:
            return f"{out}Data/T2/{index}.txt"
        name = _EXPERIMENTAL_NAMES.get(f_p.experimental_t2_label)
        return f"{out}Data/Experimental_T2/{name}.txt" if name is not None else ""
    if f_p.t2l:
        if f_p.type_of_experiment == "Molecule_Centres":
            return f"{out}Data/T2L/T2L_Centres_0{input.t2l_label}.csv"
        if f_p.type_of_experiment == "Centres_Plus_Ox":
            return f"{out}Data/T2L_CO/T2L_CO_0{input.t2l_label}.csv"
        return ""
    if input.fcc:
        return f"{out}Data/Custom/FCC.txt"
    if input.hcp:
        return f"{out}Data/Custom/HCP.txt"
    if input.homometric:
        return f"{out}Data/Custom/Homometric/Homometric.txt"
    return f"{out}Data/Custom.txt"