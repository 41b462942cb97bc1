from pathlib import Path

from setuptools import find_namespace_packages, setup

README = Path(__file__).parent / "README.md"

setup(
    name="dtsbundle",
    version="0.1.0",
    description="Bundle a tree of TypeScript declaration files into a single .d.ts module",
    long_description=README.read_text(encoding="utf-8") if README.exists() else "",
    long_description_content_type="text/markdown",
    author="dtsbundle contributors",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["dtsbundle", "dtsbundle.*"]),
    extras_require={"test": ["pytest>=7"]},
    entry_points={"console_scripts": ["dtsbundle=dtsbundle.cli:main"]},
)
