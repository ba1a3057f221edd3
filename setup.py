from setuptools import setup

setup(
    name='iconwolf',
    version='0.1.0',
    description='Generate app icon variants from a square PNG or an Apple Icon Composer .icon bundle',
    packages=['iconwolf'],
    install_requires=[
        'Pillow>=10.1',
        'requests',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': ['iconwolf=iconwolf.cli:main'],
    },
    python_requires='>=3.8',
)
