"""Tests for single-file and directory conversion."""

import os

import numpy as np

from pycloudconvert.batch import list_files, run, target_path_for
from pycloudconvert.config import resolve_config
from pycloudconvert.pointcloud import PointCloud


def test_directory_batch_two_files(source_dir, tmp_path, quiet_logger):
    out_dir = tmp_path / "out" / "nested"
    config = resolve_config({'voxel_sample': 0.05, 'estimate_normals': 0.1})

    result = run(os.fspath(source_dir), os.fspath(out_dir), config, quiet_logger)

    assert result.ok
    assert sorted(os.listdir(out_dir)) == ["a.ply", "b.ply"]
    assert result.converted == [os.fspath(out_dir / "a.ply"), os.fspath(out_dir / "b.ply")]

    a = PointCloud.from_file(os.fspath(out_dir / "a.ply"))
    b = PointCloud.from_file(os.fspath(out_dir / "b.ply"))
    assert 0 < len(a) <= 10
    assert 0 < len(b) <= 5
    assert a.has_normals() and b.has_normals()
    # a had no normals: oriented toward -Z; b follows its original +Z normals
    assert np.all(a.normals_numpy() @ np.array([0.0, 0.0, -1.0]) >= 0.0)
    assert np.all(b.normals_numpy() @ np.array([0.0, 0.0, 1.0]) >= 0.0)


def test_directory_batch_without_options_copies_content(source_dir, tmp_path, quiet_logger):
    out_dir = tmp_path / "copy"
    result = run(os.fspath(source_dir), os.fspath(out_dir), resolve_config({}), quiet_logger)
    assert result.ok
    for name in ("a.ply", "b.ply"):
        src = PointCloud.from_file(os.fspath(source_dir / name))
        dst = PointCloud.from_file(os.fspath(out_dir / name))
        np.testing.assert_array_equal(dst.to_numpy(), src.to_numpy())
        assert dst.has_normals() == src.has_normals()


def test_subdirectories_are_not_visited(source_dir, tmp_path, quiet_logger):
    nested = source_dir / "deeper"
    nested.mkdir()
    PointCloud.from_numpy([[0.0, 0.0, 0.0]]).save(os.fspath(nested / "c.ply"))
    out_dir = tmp_path / "out"
    run(os.fspath(source_dir), os.fspath(out_dir), resolve_config({}), quiet_logger)
    assert sorted(os.listdir(out_dir)) == ["a.ply", "b.ply"]


def test_bad_file_is_skipped_and_others_converted(source_dir, tmp_path, capsys):
    (source_dir / "notes.txt").write_text("hello\n")
    out_dir = tmp_path / "out"
    result = run(os.fspath(source_dir), os.fspath(out_dir), resolve_config({'verbose': 0}))

    assert not result.ok
    assert [path for path, _ in result.failed] == [os.fspath(source_dir / "notes.txt")]
    assert len(result.converted) == 2
    assert sorted(os.listdir(out_dir)) == ["a.ply", "b.ply"]
    assert "Failed to convert" in capsys.readouterr().err


def test_single_file_written_to_target(source_dir, tmp_path, quiet_logger):
    target = tmp_path / "single.ply"
    config = resolve_config({'clip_x_max': 0.15})
    result = run(os.fspath(source_dir / "a.ply"), os.fspath(target), config, quiet_logger)
    assert result.ok and result.converted == [os.fspath(target)]
    cloud = PointCloud.from_file(os.fspath(target))
    assert np.all(cloud.to_numpy()[:, 0] <= 0.15)


def test_missing_source_does_nothing(tmp_path, capsys):
    logger_config = resolve_config({})
    out_dir = tmp_path / "out"
    result = run(os.fspath(tmp_path / "nope"), os.fspath(out_dir), logger_config)
    assert not result.ok and result.converted == []
    assert not out_dir.exists()
    assert "File or directory does not exist." in capsys.readouterr().err


def test_processed_line_only_when_a_stage_ran(source_dir, tmp_path, capsys):
    run(os.fspath(source_dir / "a.ply"), os.fspath(tmp_path / "x.ply"), resolve_config({}))
    assert "Processed point cloud" not in capsys.readouterr().out

    run(os.fspath(source_dir / "a.ply"), os.fspath(tmp_path / "y.ply"),
        resolve_config({'clip_x_min': -100.0}))
    assert "Processed point cloud from 10 points to 10 points." in capsys.readouterr().out


def test_target_path_keeps_file_name():
    assert target_path_for("/data/in/scan.pcd", "out/") == os.path.join("out", "scan.pcd")
    assert target_path_for("scan.ply", "/tmp/out/./x/..") == os.path.join("/tmp/out", "scan.ply")


def test_list_files_is_sorted_and_flat(tmp_path):
    for name in ("b.ply", "a.ply", "c.pcd"):
        (tmp_path / name).write_text("")
    (tmp_path / "sub").mkdir()
    assert [os.path.basename(p) for p in list_files(os.fspath(tmp_path))] == ["a.ply", "b.ply", "c.pcd"]


def test_directory_into_existing_file_is_reported(source_dir, tmp_path, capsys):
    occupied = tmp_path / "occupied"
    occupied.write_text("keep me")
    result = run(os.fspath(source_dir), os.fspath(occupied), resolve_config({'verbose': 0}))
    assert not result.ok and result.converted == []
    assert [path for path, _ in result.failed] == [os.fspath(source_dir)]
    assert occupied.read_text() == "keep me"
    assert "Cannot create output directory" in capsys.readouterr().err
