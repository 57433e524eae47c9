from setuptools import setup, find_packages

setup(
    name='workload_advisor',
    version='0.1.0',
    packages=find_packages(exclude=['tests*']),
    install_requires=[
        'fastapi',
        'httpx',
        'pydantic>=2',
        'uvicorn',
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-asyncio',
            'pytest-httpx',
        ],
    },
    entry_points={
        'console_scripts': ['workload-advisor=workload_advisor.cli:main'],
    },
)
