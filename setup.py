from setuptools import setup

setup(name='fibonacci-engine',
      version='1.0',
      description='Exact Fibonacci numbers by fast doubling, with golden ratio convergence tables and plots',
      py_modules=['fib_engine', 'fib_settings', 'fib_convergence'],
      python_requires='>=3.8',
      install_requires=[
          'numpy',
          'pandas',
          'matplotlib',
      ],
      extras_require={
          'test': ['pytest'],
      })
