#!/usr/bin/env python3

import setuptools

setuptools.setup(
    name='cmdspec',
    version='0.1.0',
    description='cmdspec - cloneable, comparable, serializable process invocations',
    packages=setuptools.find_packages(exclude=['tests']),
    python_requires='>=3.10',
    install_requires=['funcpipes'],
    extras_require={'test': ['pytest']},
)
