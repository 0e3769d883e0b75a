from setuptools import setup, find_packages

setup(
    name="podmanveth",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "pydantic>=2",
        "psutil",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'podmanveth = podmanveth.cmds:main',
            'podmanveth-ip = podmanveth.cmds:main_ip',
        ],
    }
)
