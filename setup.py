from setuptools import setup, find_packages

setup(
    name="zohodesk-nodes",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "httpx>=0.24.0",
        "pydantic>=2.0.0",
        "python-dotenv>=1.0.0"
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
        ],
    },
    author="Paul",
    author_email="your.email@example.com",
    description="Zoho Desk ticket and trigger nodes for workflow automation hosts",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    url="https://github.com/your-org/zohodesk-nodes",
)
