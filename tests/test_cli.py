from __future__ import annotations

import json

import numpy as np
import pytest
from click.testing import CliRunner

from roi_stack.cli import cli


@pytest.fixture
def inputs(tmp_path):
    data = (np.arange(4 * 10 * 12) % 256).astype(np.uint8).reshape(4, 10, 12)
    volume_path = tmp_path / "stack.npy"
    np.save(volume_path, data)

    rois_path = tmp_path / "rois.json"
    rois_path.write_text(
        json.dumps(
            {
                "rois": [
                    {"label": "0002-0000-0001", "x": 1, "y": 1, "width": 4, "height": 3},
                    {"label": "0003-0000-0001", "x": 2, "y": 2, "width": 4, "height": 4},
                    {"label": "pt", "x": 2, "y": 3, "width": 0, "height": 0,
                     "position": 2, "kind": "point"},
                ]
            }
        )
    )
    return data, volume_path, rois_path


def test_limits_prints_bounding_box(inputs) -> None:
    _, volume_path, rois_path = inputs

    result = CliRunner().invoke(cli, ["limits", str(volume_path), str(rois_path)])

    assert result.exit_code == 0
    assert "1 6 1 6 2 3" in result.output


def test_limits_fails_without_valid_rois(tmp_path, inputs) -> None:
    _, volume_path, _ = inputs
    rois_path = tmp_path / "bad.json"
    rois_path.write_text(
        json.dumps({"rois": [{"label": "9999-0000-0001", "x": 1, "y": 1, "width": 2, "height": 2}]})
    )

    result = CliRunner().invoke(cli, ["limits", str(volume_path), str(rois_path)])

    assert result.exit_code == 1
    assert "No valid ROIs" in result.output


def test_select_lists_labels(inputs) -> None:
    _, volume_path, rois_path = inputs

    result = CliRunner().invoke(cli, ["select", str(volume_path), str(rois_path), "3"])

    assert result.exit_code == 0
    assert "0003-0000-0001" in result.output
    assert "0002-0000-0001" not in result.output


def test_crop_writes_output(tmp_path, inputs) -> None:
    _, volume_path, rois_path = inputs
    output = tmp_path / "crop.npy"

    result = CliRunner().invoke(
        cli,
        ["crop", str(volume_path), str(rois_path), str(output), "--padding", "1",
         "--fill-background", "--fill-value", "9"],
    )

    assert result.exit_code == 0, result.output
    cropped = np.load(output)
    assert cropped.shape == (3, 7, 7)
    assert (cropped[:, 0, :] == 9).all()


def test_crop_rejects_negative_padding(tmp_path, inputs) -> None:
    _, volume_path, rois_path = inputs

    result = CliRunner().invoke(
        cli, ["crop", str(volume_path), str(rois_path), str(tmp_path / "o.npy"), "-p", "-1"]
    )

    assert result.exit_code != 0


def test_points_prints_coordinates(inputs) -> None:
    _, volume_path, rois_path = inputs

    result = CliRunner().invoke(cli, ["points", str(volume_path), str(rois_path)])

    assert result.exit_code == 0
    assert "2 3 2" in result.output


def test_points_accepts_channel_and_timepoint(inputs) -> None:
    _, volume_path, rois_path = inputs

    result = CliRunner().invoke(
        cli, ["points", str(volume_path), str(rois_path), "--channel", "0", "-t", "0"]
    )

    assert result.exit_code == 0
    assert "2 3 2" in result.output
