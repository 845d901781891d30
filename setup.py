import setuptools

with open("README.md", "r") as fh:
    long_description = fh.read()

packages = setuptools.find_namespace_packages(include=["tokenswap", "tokenswap.*"])
tests_require = [
    'pytest>=7,<9',
]
setuptools.setup(
    name="tokenswap",
    version="0.0.1",
    description="Trustless two-party token swap escrow with program-controlled vaults.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=packages,
    python_requires='>=3.10',
    install_requires=[
        'appdirs>=1.4.4,<2',
        'enforce-typing>=1.0.0,<2'
    ],
    tests_require=tests_require,
    extras_require={
        'test': tests_require
    }
)
