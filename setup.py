#!/usr/bin/env python

from setuptools import setup

setup(
    name='scriptgif',
    version='0.1.0',
    license='BSD 3-clause license',
    description='Render terminal sessions recorded with script(1) as animated GIF images',
    long_description='A Linux utility written in Python which replays the '
                     'typescript of a terminal session at its original pace, '
                     'captures the terminal window at each chunk of output '
                     'and assembles the captures into an animated GIF.',
    classifiers=[
        'Environment :: Console',
        'Environment :: X11 Applications',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: BSD License',
        'Operating System :: POSIX :: Linux',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Topic :: System :: Shells',
        'Topic :: Terminals'
    ],
    python_requires='>=3.7',
    packages=[
        'scriptgif',
        'scriptgif.tests'
    ],
    scripts=['scripts/scriptgif'],
    include_package_data=True,
    install_requires=[],
    extras_require={
        'dev': [
            'coverage',
            'pylint',
            'pytest',
            'twine',
            'wheel',
        ]
    }
)
