# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="biotree",
    version="0.1.0",
    description="Mind-map viewer for biomechanics data-collection session folders",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(
        where="src",
        include=["biotree", "biotree.*"],
        exclude=["biotree.interface.web.templates", "biotree.interface.web.static"],
    ),
    package_data={
        "biotree.interface.web": ["templates/*.html", "static/*"],
    },
    python_requires=">=3.9",
    install_requires=[
        "Flask>=3.0",
        "requests>=2.31",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        'console_scripts': [
            'biotree=biotree.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
