from setuptools import setup, find_packages

setup(
    name="oauth1_client",
    version="1.0.0",
    packages=find_packages(exclude=("tests", "tests.*", "examples")),
    install_requires=[
        "aiohttp>=3.8.1",
        "pydantic>=2.0",
        "pydantic-settings>=2.0",
        "python-dotenv>=0.19.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-asyncio>=0.21",
            "oauthlib>=3.1",
        ],
    },
    python_requires=">=3.8",
    description="Three-legged OAuth 1.0a client with HMAC-SHA1 request signing",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
    ],
)
