# Copyright (c) Syntropy Systems
"""Pytest fixtures for ladderlens tests."""

import json
import os
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest
from openpyxl import Workbook

# Store original cwd at module load time
_original_cwd = Path.cwd()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def ladderlens_project(temp_dir: Path) -> Generator[Path, None, None]:
    """Create a project directory with a .ladderlens config."""
    config_dir = temp_dir / ".ladderlens"
    config_dir.mkdir()
    _ = (config_dir / "config.yaml").write_text(
        "share_base_url: https://ladders.example.com\n"
    )

    # Change to temp directory
    os.chdir(temp_dir)

    yield temp_dir

    # Always return to original cwd
    os.chdir(_original_cwd)


@pytest.fixture
def sample_record() -> dict[str, object]:
    """A record shaped like a spreadsheet row, with JSON-encoded cells."""
    ladder_info = {
        "h264_1080p": json.dumps(
            {"status": "1", "bitrate": 5000, "universal_vmaf": 95.123, "definition": 1080}
        ),
        "h264_720p": {"status": "0", "reason": "low_vmaf", "bitrate": 3000},
        "h264_540p": {"status": 0, "reason": "Bitrate_Cap", "bitrate": 1500},
        "h264_360p": {"status": "2", "bitrate": 800},
    }
    return {
        "vid": "v123",
        "item_id": "i456",
        "device_id": "",
        "user_id": 42,
        "priority_region": "EU",
        "device_platform": "android",
        "client_version": "31.2.0",
        "video_duration": "37.25",
        "access_type": "wifi",
        "overall_score": 87.56,
        "ladders_before_filter_adaptive_video": '["1080p", "720p", "540p", "360p"]',
        "ladders_after_filter_adaptive_video": '["1080p", "720p", "540p", "360p"]',
        "ladders_after_filter_ladder_based_on_strategy_info": '["1080p", "720p", "540p"]',
        "ladders_after_filter_ladder_based_on_create_time": '["1080p", "720p"]',
        "ladders_after_filter_ab_test_encode_user_tag": '["1080p", "720p"]',
        "ladders_after_filter_video_play_qualities": '["1080p"]',
        "ladders_after_filter_irregular_bitrate_ladder_group": '["1080p"]',
        "ladders_after_filter_irregular_bitrate_ladder": '["1080p"]',
        "ladder_info": json.dumps(ladder_info),
        "is_hdr": "false",
        "network_speed": 12.5,
        "strategy_settings": '{"max_bitrate": 6000, "min_vmaf": null, "mode": ""}',
    }


@pytest.fixture
def records_json(temp_dir: Path, sample_record: dict[str, object]) -> Path:
    """Two-record JSON file."""
    second = dict(sample_record, vid="v999")
    path = temp_dir / "records.json"
    _ = path.write_text(json.dumps([sample_record, second]))
    return path


@pytest.fixture
def records_xlsx(temp_dir: Path, sample_record: dict[str, object]) -> Path:
    """Workbook with a header row and two records."""
    workbook = Workbook()
    sheet = workbook.active
    headers = list(sample_record)
    sheet.append(headers)
    sheet.append([sample_record[name] for name in headers])
    sheet.append([sample_record[name] if name != "vid" else "v999" for name in headers])
    path = temp_dir / "records.xlsx"
    workbook.save(path)
    return path
