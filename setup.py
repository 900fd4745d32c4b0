from setuptools import setup, find_packages

setup(
    name="registry-mqtt",
    version="1.0.0",
    description="MQTT notifications for AAS registry lifecycle events",
    package_dir={"": "common"},
    packages=find_packages(where="common"),
    install_requires=[
        "paho-mqtt>=2.0.0",  # CallbackAPIVersion.VERSION2
        "pydantic>=2.0",
        "pyyaml>=5.4",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Topic :: Software Development :: Libraries",
    ],
    python_requires=">=3.8",
)
