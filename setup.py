from setuptools import setup, find_packages
from pathlib import Path

here = Path(__file__).parent
requirements = []
req_file = here / "requirements.txt"
if req_file.exists():
    requirements = [r.strip() for r in req_file.read_text(encoding="utf-8").splitlines() if r.strip() and not r.strip().startswith("#")]

setup(
    name="svurl",
    version="0.1.0",
    description="在命令行保存、去重并取回 URL 的小工具",
    packages=find_packages(exclude=("tests", "tests.*", "tools")),
    python_requires=">=3.10",
    install_requires=requirements,
    extras_require={"test": ["pytest"]},
    entry_points={
        "console_scripts": [
            "svurl=svurl.cli:main",
        ]
    },
)
