from setuptools import setup

dependencies = [
      'numpy>=1.20',
      'click==8.*',
      'pyyaml>=5.1'
]

setup(name='extbf',
      version='1.0',
      description='extbf: an extensible BrainF**k interpreter',
      packages=['extbf'],
      install_requires=dependencies,
      extras_require={
            'test': ['pytest']
      },
      python_requires='>=3.7',
      license='Apache 2.0',
      entry_points='''
            [console_scripts]
            extbf-run=extbf.run:run
      ''',
     )
