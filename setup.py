from setuptools import setup, find_packages

setup(
    name="pycloudconvert",
    version="0.1",
    packages=find_packages(exclude=['tests']),
    install_requires=[
        'numpy',
        'open3d',
    ],
    extras_require={
        'tests': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'pycloudconvert=pycloudconvert.cli:main',
        ],
    },
)
