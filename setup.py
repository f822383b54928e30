from setuptools import setup, find_packages

setup(
    name="uiauto-pom",
    version="1.0.0",
    packages=find_packages(include=["uiauto_pom", "uiauto_pom.*"]),
    install_requires=[
        "pyyaml>=5.4",
        "jsonschema>=4.0.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    python_requires=">=3.8",
    package_data={
        "uiauto_pom": ["schemas/*.json"],
    },
    entry_points={
        "pytest11": [
            "uiauto_pom = uiauto_pom.plugin",
        ],
    },
)
