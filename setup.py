from setuptools import find_packages, setup

setup(
    name="stockbill",
    version="0.1.0",
    description="Inventory catalog and GST invoicing",
    packages=find_packages(exclude=["stockbill.tests"]),
    python_requires=">=3.9",
    install_requires=[
        "sqlalchemy>=2.0",
        "pandas",
        "numpy",
        "click",
        "python-dotenv"
    ],
    extras_require={"dev": ["pytest"]},
    entry_points={
        "console_scripts": [
            "stockbill=stockbill.cli.main:cli",
        ],
    },
)
