from setuptools import setup, find_packages


setup(name='rigidmath',
      version='1.0.0',
      description='Vectors, matrices, quaternions, and euler angle rotations for 3D graphics and rigid body simulation',
      packages=find_packages(include=['rigidmath', 'rigidmath.*']),
      python_requires='>=3.11',
      install_requires=['numpy', 'pandas'],
      extras_require={'test': ['pytest', 'scipy']})
