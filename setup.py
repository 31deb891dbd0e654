from setuptools import setup, find_packages

setup(
    name="noderpc",
    version="0.1.0",
    description="noderpc - failover JSON-RPC client with legacy dialect fallback",
    author="noderpc Team",
    packages=find_packages(include=["noderpc", "noderpc.*"]),
    install_requires=[
        "httpx>=0.24.0",
        "opentelemetry-api>=1.14.0",
        "opentelemetry-sdk>=1.14.0",
        "opentelemetry-exporter-otlp>=1.14.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "pytest-cov",
        ],
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov",
            "black",
            "isort",
            "pylint",
        ],
    },
    python_requires=">=3.9",
)
