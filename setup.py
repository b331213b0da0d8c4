#!/usr/bin/env python
from setuptools import setup

requires = ['tqdm', 'tabulate', 'click']
test_requires = ['pytest', 'hypothesis']

setup(
    name='transducers',
    version='0.1.0',
    packages=['transducers'],
    install_requires = requires,
    extras_require = {'test': test_requires},
    entry_points = {
      'console_scripts': [
        'transducers-bench = transducers.bench:main',
        ],
    },
    license='MIT',
    description='composable reducers with early termination, fused into single pass pipelines.',
    long_description_content_type='text/markdown',
    long_description=open('README.md').read(),
    python_requires='>=3.7',
    classifiers=[
        'Development Status :: 4 - Beta',
        'License :: OSI Approved :: MIT License',
        'Topic :: Software Development :: Libraries',
        'Programming Language :: Python :: 3',
    ],
)
