"""Setup script for daylight-watch package with data_files for the example config."""

from pathlib import Path

from setuptools import setup

# Package metadata comes from pyproject.toml; this file only ships
# config.example.yaml to /usr/share/daylight-watch/
config_example = Path(__file__).parent / "config.example.yaml"
data_files = []
if config_example.exists():
    config_example_rel = config_example.relative_to(Path(__file__).parent)
    data_files.append(("usr/share/daylight-watch", [str(config_example_rel)]))

setup(
    name="daylight-watch",  # Must match pyproject.toml
    data_files=data_files,
)
