from setuptools import setup, find_packages

setup(
    name='gardenctl',
    version='0.1.0',
    packages=find_packages(include=['gardenctl', 'gardenctl.*']),
    include_package_data=True,
    install_requires=[
        'typer',
        'kubernetes',
        'urllib3',
        'pydantic>=2',
        'pyyaml',
        'jsonschema',
        'python-dotenv',
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },
    entry_points={
        'console_scripts': [
            'gardenctl=gardenctl.cli:app'
        ]
    },
    description='Target garden, project, seed and shoot clusters of Gardener installations',
    classifiers=[
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
    ],
    python_requires='>=3.8',
)
