from setuptools import setup, find_packages

setup(
    name="hud_core",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"desktop_ui": ["qml/*.qml"]},
    install_requires=[
        "requests>=2.31.0",
        "paho-mqtt>=2.0.0",
        "python-dotenv>=1.0.0",
        "psutil>=5.9.0",
        "PySide6>=6.7.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
            "pytest-asyncio>=0.23.0",
        ],
    },
    python_requires=">=3.10",
)
