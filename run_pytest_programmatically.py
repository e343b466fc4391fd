import pytest
import sys
import os

sys.path.append(os.getcwd())

test_files = [
    "tests/unit/data/test_aggregation.py",
    "tests/unit/indicators/test_smoothing.py",
    "tests/unit/indicators/test_bands.py",
    "tests/unit/indicators/test_momentum.py",
    "tests/unit/indicators/test_trend.py",
    "tests/unit/indicators/test_zones.py",
    "tests/unit/indicators/test_repeatability.py",
    "tests/unit/indicators/test_summary.py",
    "tests/unit/indicators/test_registry.py",
    "tests/unit/indicators/test_pipeline.py",
    "tests/unit/config/test_settings.py",
    "tests/unit/utils/test_logging.py",
    "tests/unit/cli/test_cli.py",
]

failed_files = []

for f in test_files:
    print(f"Running {f}...")
    retcode = pytest.main(["-q", f])
    if retcode != 0:
        print(f"FAIL: {f}")
        failed_files.append(f)
    else:
        print(f"PASS: {f}")

if failed_files:
    print(f"Failed files: {failed_files}")
    sys.exit(1)

print("All files passed!")
sys.exit(0)
