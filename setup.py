"""
Setup configuration for PyHMC5883L library.

This is a pure Python library for the HMC5883L magnetometer.
It can be installed via:
    - pip install .
    - pip install -e .  (for development)
"""

from setuptools import setup, find_packages

package_name = 'pyhmc5883l'

setup(
    name=package_name,
    version='1.0.0',
    packages=find_packages(include=['pyhmc5883l', 'pyhmc5883l.*']),

    install_requires=[
        'smbus2>=0.4',
    ],

    extras_require={
        'dev': [
            'pytest>=7.0',
            'pytest-cov',
            'pytest-timeout',
        ],
    },

    zip_safe=True,

    description='Python driver for the HMC5883L three-axis magnetometer',
    long_description=open('README.md').read() if __import__('os').path.exists('README.md') else '',
    long_description_content_type='text/markdown',
    license='MIT',

    # CLI tools
    entry_points={
        'console_scripts': [
            'hmc5883l-read = pyhmc5883l.cli:run_reader_cli',
        ],
    },

    python_requires='>=3.8',

    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Topic :: System :: Hardware :: Hardware Drivers',
    ],
)
