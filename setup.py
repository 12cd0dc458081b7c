from setuptools import find_packages, setup

setup(
    name="flagwise",
    version="0.1.0",
    description="GNU-style command-line option parser with typed values and grouped help.",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    author="Roland Thomas Jr",
    author_email="roland@rtj.dev",
    packages=find_packages(include=["flagwise", "flagwise.*"]),
    python_requires=">=3.10",
    install_requires=[
        "rich>=13.0",
        "prompt_toolkit>=3.0",
        "pydantic>=2.0",
        "pyyaml>=6.0",
        "toml>=0.10",
        "python-dateutil>=2.8",
        "python-json-logger>=3.1",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "flagwise=flagwise.__main__:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Development Status :: 3 - Alpha",
    ],
)
