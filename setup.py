from setuptools import find_packages, setup

VERSION = '1.0.0'


def parse_md_readme():
    try:
        with open('README.md') as fh:
            return fh.read()
    except OSError:
        return ''


TEST_REQS = [
    'coverage>=4.2',
    'pytest',
    'pytest-cov',
]


INSTALL_REQS = [
    'biopython>=1.78',
    'braceexpand==0.1.7',
    'pandas>=1.1',
    'snakemake>=6.1.1',
]


setup(
    name='clusterreport',
    version='{}'.format(VERSION),
    packages=find_packages(where='src', exclude=['tests']),
    package_dir={'': 'src'},
    package_data={'clusterreport': ['schemas/config.json']},
    description='Reports describing clusters of genome features and sequencing samples',
    long_description=parse_md_readme(),
    long_description_content_type='text/markdown',
    install_requires=INSTALL_REQS,
    extras_require={
        'test': TEST_REQS,
        'dev': ['black', 'flake8'] + TEST_REQS,
    },
    tests_require=TEST_REQS,
    python_requires='>=3.7',
    test_suite='tests',
    entry_points={'console_scripts': ['clusterreport = clusterreport.main:main']},
)
