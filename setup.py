import os

from setuptools import find_packages, setup

VERSION = '0.1.0'


def parse_readme():
    try:
        with open(os.path.join(os.path.dirname(__file__), 'README.md'), 'r') as fh:
            return fh.read()
    except OSError:
        return ''


# HSTLIB is a dependency for pysam.
# The cram file libraries fail for some OS versions and svcompare does not use cram files so we disable these options
os.environ['HTSLIB_CONFIGURE_OPTIONS'] = '--disable-lzma --disable-bz2 --disable-libcurl'


TEST_REQS = [
    'pytest',
    'pytest-cov',
]


INSTALL_REQS = [
    'biopython>=1.80',
    'braceexpand>=0.1.2',
    'intervaltree>=3.0',
    'numpy>=1.20',
    'pandas>=1.3',
    'pysam>=0.15',
]


setup(
    name='svcompare',
    version='{}'.format(VERSION),
    packages=find_packages(exclude=['tests', 'tests.*']),
    description='Structural variant breakpoint matching and reference homology scoring',
    long_description=parse_readme(),
    long_description_content_type='text/markdown',
    install_requires=INSTALL_REQS,
    extras_require={
        'test': TEST_REQS,
        'dev': ['black', 'flake8'] + TEST_REQS,
    },
    python_requires='>=3.7',
    test_suite='tests',
    entry_points={
        'console_scripts': [
            'svcompare = svcompare.main:main',
        ]
    },
)
