from pathlib import Path
from setuptools import setup, find_packages

PROJECT_ROOT = Path(__file__).parent.resolve()
SCRIPTS_DIR = PROJECT_ROOT / "bin"

script_files = []
if SCRIPTS_DIR.exists():
    for path in sorted(SCRIPTS_DIR.iterdir()):
        if path.is_file() and path.suffix not in {".csv", ".json"}:
            script_files.append(str(path.relative_to(PROJECT_ROOT)))

setup(
    name="ambari-shell",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    scripts=script_files,
    python_requires=">=3.9",
    install_requires=[
        "cli-core-yo<2",
        "pydantic>=2",
        "pyyaml",
        "requests",
        "rich",
        "typer",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
