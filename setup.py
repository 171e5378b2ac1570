from setuptools import setup, find_packages

setup(
    name='amb-lang',
    version='0.1.0',
    description='Backtracking-search compiler producing lazy, pruned enumerators',
    py_modules=['ambc', 'compiler'],
    packages=find_packages(include=['amb', 'amb.*']),
    python_requires='>=3.9',
    install_requires=[
        'lark>=1.1',
        'pydantic>=2.0',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'ambc = ambc:main',
        ],
    },
)
