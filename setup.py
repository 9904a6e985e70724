from setuptools import setup, find_packages
import pathlib


here = pathlib.Path(__file__).parent.resolve()
long_description = (here / 'README.md').read_text(encoding='utf-8')

setup(
    name="ipatrie",
    version="0.0.2",
    author="Språkbanken",
    author_email="sprakbanken@nb.no",
    description="Transcribe text to IPA with pronunciation dictionaries, orthography maps and rewrite rules",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: MIT License",
        "Operating System :: OS Independent",
        "Topic :: Text Processing :: Linguistic",
    ],
    packages=find_packages(include=["ipatrie", "ipatrie.*"]),
    python_requires=">=3.8",
    install_requires=['schema', 'click', 'pandas', 'pandera'],
    extras_require={
        'dev': ['pytest', 'pytest-cov', 'pylint', 'mypy'],
    },
    entry_points={
        'console_scripts': ['ipatrie=ipatrie.ipatrie:main'],
    },
)
