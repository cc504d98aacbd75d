from setuptools import setup, find_packages
import re

# Read version from netpay/__init__.py
with open('netpay/__init__.py') as f:
    version = re.search(r'^__version__ = ["\']([^"\']+)["\']', f.read(), re.MULTILINE).group(1)

setup(
    name='net-pay',
    version=version,
    packages=find_packages(exclude=['tests', 'tests.*']),
    package_data={
        'netpay': ['jurisdictions/*.yaml'],
    },
    install_requires=[
        'PyYAML>=6.0',
        'click>=8.0',
        'pydantic>=2.0.0',
        'rich>=13.0',
    ],
    extras_require={
        'mcp': [
            'mcp[cli]>=1.0.0,<2',
        ],
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'net-pay=netpay.cli.__main__:main',
            'net-pay-mcp=netpay.mcp.server:run_server',
        ],
    },
    author='Personal',
    description='Gross-to-net salary calculator with configurable tax and social insurance rules.',
    python_requires='>=3.10',
)
