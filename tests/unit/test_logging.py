"""Unit tests for logging setup and the error taxonomy."""

import json

import pytest

from geodesim.errors import GeodesimError, InvalidConfiguration, NumericDegeneracy, SimulationCancelled
from geodesim.game.oracle import LevelOracle, OracleConfig
from geodesim.logging import logger, setup_json_logfile, setup_logfile


@pytest.fixture
def restore_logger():
    yield
    logger.disable("geodesim")


class TestLogSinks:
    """Tests for the file sinks."""

    def test_file_sink_receives_library_records(self, tmp_path, valley_level, restore_logger):
        path = tmp_path / "geodesim.log"
        sink_id = setup_logfile(str(path))

        LevelOracle(OracleConfig(angles_deg=(30.0,), powers=(1.5,))).find_solution(valley_level)
        logger.remove(sink_id)

        text = path.read_text()
        assert "File logging initialized" in text
        assert "Level 1 solvable" in text

    def test_debug_filtered_at_info(self, tmp_path, single_well, restore_logger):
        from geodesim.core.simulator import TrajectoryOptions, compute_trajectory

        path = tmp_path / "info.log"
        sink_id = setup_logfile(str(path), level="info")
        compute_trajectory(single_well, (-3.5, 0.0), (1.0, 0.0), TrajectoryOptions(max_steps=5))
        logger.remove(sink_id)

        assert "Trajectory ended" not in path.read_text()

    def test_json_sink(self, tmp_path, restore_logger):
        path = tmp_path / "geodesim.jsonl"
        sink_id = setup_json_logfile(str(path))
        logger.remove(sink_id)

        records = [json.loads(line) for line in path.read_text().splitlines()]
        assert records[0]["record"]["message"].startswith("JSON logging initialized")


class TestErrors:
    """Tests for the exception hierarchy."""

    @pytest.mark.parametrize("cls", [InvalidConfiguration, NumericDegeneracy, SimulationCancelled])
    def test_common_base(self, cls):
        assert issubclass(cls, GeodesimError)

    def test_invalid_configuration_is_value_error(self):
        with pytest.raises(ValueError):
            raise InvalidConfiguration("bad")
