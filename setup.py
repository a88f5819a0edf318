#!/usr/bin/env python

from setuptools import setup
import labmap

if __name__ == '__main__':
    setup(name='labmap',
          version='%s'%labmap.__version__,
          description='Dense Local Assembled Binary (LAB) feature maps for cascade object detectors',
          long_description=open('README.md').read(),
          long_description_content_type='text/markdown',
          packages=['labmap', 'labmap.filters'],
          python_requires='>=3.8',
          install_requires=['numpy>=1.17', 'Pillow>=8.0'],
          extras_require={ 'test': ['pytest>=6'], },
          zip_safe=True,
    )
