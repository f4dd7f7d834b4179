"""Integration tests for the analysis runner and reports."""

import json
import math

import pytest
import numpy as np
from numpy.testing import assert_allclose

from molgeom.workflow.runner import GeometryAnalysis, GeometryResult
from molgeom.workflow.report import format_report, format_json, render
from molgeom.core.config import (
    AnalysisConfig,
    GeometryConfig,
    ReportConfig,
)
from molgeom.core.exceptions import ConfigurationError
from molgeom.molecule.structure import Atom, Molecule


class TestConfig:
    """Tests for configuration dataclasses."""

    def test_defaults(self):
        """Test default configuration."""
        config = AnalysisConfig()
        assert config.geometry.tolerance == 1e-10
        assert config.report.output_format == "text"
        assert config.report.angle_units == "radians"
        assert config.out_of_plane == []
        assert config.output_dir is None

    def test_quadruples_normalized(self):
        """Lists become tuples."""
        config = AnalysisConfig(out_of_plane=[[0, 1, 2, 3]], dihedrals=[(3, 2, 1, 0)])
        assert config.out_of_plane == [(0, 1, 2, 3)]
        assert config.dihedrals == [(3, 2, 1, 0)]

    @pytest.mark.parametrize("bad", [(0, 1, 2), (0, 1, 2, 3, 4), ("a", 1, 2, 3), (0, -1, 2, 3), 5])
    def test_bad_quadruple(self, bad):
        """Quadruples must be four non-negative integers."""
        with pytest.raises(ConfigurationError):
            AnalysisConfig(out_of_plane=[bad])

    def test_output_dir_coerced(self):
        """String output_dir becomes a Path."""
        config = AnalysisConfig(output_dir="results")
        assert config.output_dir.name == "results"

    def test_bad_report_settings(self):
        """Unknown formats and units are rejected."""
        with pytest.raises(ConfigurationError):
            ReportConfig(output_format="yaml")
        with pytest.raises(ConfigurationError):
            ReportConfig(angle_units="gradians")
        with pytest.raises(ConfigurationError):
            ReportConfig(precision=-1)

    def test_negative_tolerance(self):
        """Tolerance must be non-negative."""
        with pytest.raises(ConfigurationError):
            GeometryConfig(tolerance=-1.0)


class TestGeometryAnalysis:
    """Tests for GeometryAnalysis."""

    def test_full_analysis(self, planar_molecule):
        """All quantities computed for a well-formed molecule."""
        config = AnalysisConfig(out_of_plane=[(0, 1, 2, 3)], dihedrals=[(0, 2, 1, 3)])
        result = GeometryAnalysis(config).analyze(planar_molecule)

        assert result.succeeded
        assert result.bond_lengths.shape == (4, 4)
        assert len(result.bond_angles) == 4
        assert result.out_of_plane[(0, 1, 2, 3)] == 0.0
        assert (0, 2, 1, 3) in result.dihedrals

    def test_steps_can_be_disabled(self, water_molecule):
        """Disabled steps leave their fields empty."""
        config = AnalysisConfig(geometry=GeometryConfig(compute_bond_angles=False))
        result = GeometryAnalysis(config).analyze(water_molecule)
        assert result.bond_lengths is not None
        assert result.bond_angles is None

    def test_two_atoms_records_angle_failure(self):
        """Too few atoms for angles does not stop bond lengths."""
        mol = Molecule(atoms=[Atom(tag=1, x=0.0, y=0.0, z=0.0),
                              Atom(tag=1, x=0.0, y=0.0, z=0.74)], name="H2")
        result = GeometryAnalysis().analyze(mol)

        assert not result.succeeded
        assert result.bond_lengths is not None
        assert result.bond_angles is None
        assert "bond_angles" in result.errors
        assert "bond_lengths" not in result.errors

    def test_single_atom(self):
        """One atom fails both derived computations."""
        mol = Molecule(atoms=[Atom(tag=18, x=0.0, y=0.0, z=0.0)], name="Ar")
        result = GeometryAnalysis().analyze(mol)
        assert set(result.errors) == {"bond_lengths", "bond_angles"}

    def test_degenerate_out_of_plane_recorded(self, colinear_atoms):
        """Degenerate quadruples are recorded, the rest still computed."""
        atoms = colinear_atoms + [Atom(tag=1, x=1.0, y=1.0, z=0.0)]
        config = AnalysisConfig(out_of_plane=[(3, 0, 1, 2), (2, 0, 1, 3)])
        result = GeometryAnalysis(config).analyze(Molecule(atoms=atoms, name="chain"))

        assert "out_of_plane(3,0,1,2)" in result.errors
        assert (3, 0, 1, 2) not in result.out_of_plane
        assert result.out_of_plane[(2, 0, 1, 3)] == 0.0

    def test_index_out_of_range_recorded(self, water_molecule):
        """Requests naming missing atoms become errors."""
        config = AnalysisConfig(dihedrals=[(0, 1, 2, 9)])
        result = GeometryAnalysis(config).analyze(water_molecule)
        assert "dihedral(0,1,2,9)" in result.errors

    def test_analyze_files_continues_after_failure(self, write_geometry_file):
        """A bad file does not abort the others."""
        good = write_geometry_file("3\n8 0 0 0\n1 0.96 0 0\n1 -0.24 0.93 0\n",
                                   name="good.geom")
        bad = write_geometry_file("3\n1 0 0 0\n1 1 0 0\n", name="bad.geom")
        also_good = write_geometry_file("2\n1 0 0 0\n1 0 0 0.74\n", name="h2.geom")

        results = GeometryAnalysis().analyze_files([good, bad, also_good])

        assert [r.name for r in results] == ["good", "bad", "h2"]
        assert results[0].succeeded
        assert results[1].molecule is None
        assert "read" in results[1].errors
        assert results[2].bond_lengths is not None

    def test_result_to_dict_is_json(self, water_molecule):
        """Results serialize to JSON."""
        config = AnalysisConfig(out_of_plane=[(0, 1, 1, 2)])
        result = GeometryAnalysis(config).analyze(water_molecule)
        data = json.loads(json.dumps(result.to_dict()))

        assert data["name"] == "H2O"
        assert len(data["atoms"]) == 3
        assert len(data["bond_lengths"]) == 3
        assert data["bond_angles"][0]["j"] == 1
        assert "out_of_plane(0,1,1,2)" in data["errors"]

    def test_to_dict_degrees(self, right_angle_atoms):
        """Angles convert to degrees on request."""
        result = GeometryAnalysis().analyze(Molecule(atoms=right_angle_atoms))
        data = result.to_dict(degrees=True)
        assert data["angle_units"] == "degrees"
        assert_allclose(data["bond_angles"][0]["angle"], 90.0)

    def test_file_stem(self, tmp_path):
        """Output stems come from the source file, else a sanitised name."""
        from_file = GeometryResult(name="water opt/b3lyp", source=tmp_path / "w.xyz")
        assert from_file.file_stem == "w"
        assert GeometryResult(name="water opt/b3lyp").file_stem == "water_opt_b3lyp"
        assert GeometryResult(name="").file_stem == "molecule"

    def test_save(self, tmp_path, water_molecule):
        """Results can be saved as JSON."""
        result = GeometryAnalysis().analyze(water_molecule)
        path = tmp_path / "water.json"
        result.save(path)
        with open(path) as f:
            data = json.load(f)
        assert_allclose(np.array(data["bond_lengths"]), result.bond_lengths)


class TestReport:
    """Tests for report formatting."""

    def test_text_report(self, water_molecule):
        """Text report lists atoms, lengths and angles."""
        result = GeometryAnalysis().analyze(water_molecule)
        text = format_report(result, ReportConfig(precision=3))

        assert "Molecule: H2O" in text
        assert "Number of atoms: 3" in text
        assert "Bond lengths:" in text
        assert "0.960" in text
        assert "0-1-2" in text.replace(" ", "")

    def test_degrees(self, right_angle_atoms):
        """Angles printed in degrees when configured."""
        result = GeometryAnalysis().analyze(Molecule(atoms=right_angle_atoms, name="L"))
        text = format_report(result, ReportConfig(angle_units="degrees", precision=2))
        assert "90.00" in text
        assert "(deg" in text

    def test_errors_listed(self):
        """Failed steps appear in the report."""
        result = GeometryResult(name="broken", errors={"read": "bad header"})
        text = format_report(result)
        assert "Errors:" in text
        assert "read: bad header" in text

    def test_out_of_plane_section(self, methane_molecule):
        """Out-of-plane values show both the sine and the angle."""
        config = AnalysisConfig(out_of_plane=[(1, 2, 0, 3)])
        result = GeometryAnalysis(config).analyze(methane_molecule)
        text = format_report(result)
        assert "Out-of-plane" in text
        assert "sin=" in text

    def test_json_render(self, water_molecule):
        """render() follows the configured format."""
        result = GeometryAnalysis().analyze(water_molecule)
        data = json.loads(render(result, ReportConfig(output_format="json")))
        assert data["name"] == "H2O"
        assert json.loads(format_json(result)) == data
        assert render(result).startswith("=")

    def test_out_of_plane_angle_in_json(self, methane_molecule):
        """JSON carries the arcsin of the stored sine."""
        config = AnalysisConfig(out_of_plane=[(1, 2, 0, 3)])
        result = GeometryAnalysis(config).analyze(methane_molecule)
        entry = result.to_dict()["out_of_plane"][0]
        assert entry["atoms"] == [1, 2, 0, 3]
        assert_allclose(entry["angle"], math.asin(entry["sin"]))
