from setuptools import setup, find_packages
import re

# Read version from equitycalc/__init__.py
with open('equitycalc/__init__.py') as f:
    version = re.search(r'^__version__ = ["\']([^"\']+)["\']', f.read(), re.MULTILINE).group(1)

setup(
    name='equitycalc',
    version=version,
    packages=find_packages(exclude=['tests', 'tests.*']),
    package_data={
        'equitycalc': ['tax_rules/*.yaml'],
    },
    install_requires=[
        'PyYAML>=6.0',
        'click>=8.0',
        'pydantic>=2.0.0',
        'rich>=13.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'equity-calc=equitycalc.cli.__main__:main',
        ],
    },
    author='Personal',
    description='Net proceeds and tax breakdown for RSU and ESPP sales (Israel, Section 102).',
    python_requires='>=3.10',
)
