# setup.py
from setuptools import setup, find_packages

setup(
    name="i18nedt",
    version="0.1.0",
    description="A CLI tool for batch-editing translation keys across locale JSON files in your $EDITOR.",
    author="Your Name or Team",
    author_email="your_email@example.com",
    # 只包含 i18nedt 包及其子包
    packages=find_packages(include=['i18nedt', 'i18nedt.*']),

    include_package_data=True,
    # 编辑缓冲区提示和 config.yaml 的 Jinja2 模板
    package_data={
        'i18nedt': ['templates/*.j2'],
    },
    install_requires=[
        "click>=8.0",
        "pyyaml",
        "jinja2",
        "rich",
    ],
    extras_require={
        'test': [
            "pytest",
        ],
    },
    entry_points={
        'console_scripts': [
            'i18nedt = i18nedt.cli:cli',
        ],
    },
    python_requires=">=3.8",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Internationalization",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
