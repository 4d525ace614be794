"""Setup script for poly."""
from setuptools import setup, find_packages  # type: ignore
import poly

setup(
    name='poly',
    version=poly.version,
    description='Hindley-Milner type inference for a small functional language',  # noqa
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    license='MIT',
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Developers',
        'Topic :: Software Development :: Compilers',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
    ],
    keywords='type-inference hindley-milner',
    packages=find_packages(),  # type: ignore
    python_requires='>=3.9',
    install_requires=[
        'parsy>=1.3.0,<2',
        'typing-extensions>=4',
    ],
    extras_require={
        'test': ['coverage>=6.4.4', 'hypothesis>=6.70'],
        'dev': ['mypy>=1.1.1'],
    },
    entry_points={'console_scripts': ['poly=poly.__main__:main']},
)
