from setuptools import setup, find_namespace_packages

setup(
    name="campus-erp-gateway",
    version="1.0.0",
    packages=find_namespace_packages(include=["campus_erp", "campus_erp.*"]),
    install_requires=[
        "fastapi",
        "pydantic",
        "pydantic-settings",
        "python-dotenv",
        "python-multipart",
        "boto3",
        "botocore",
        "mangum",
        "uvicorn",
    ],
    extras_require={
        "test": [
            "pytest",
            "httpx",
        ],
    },
    python_requires=">=3.9",
)
