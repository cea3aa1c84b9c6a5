from glob import glob
from setuptools import setup


setup(
    name='sycalc',
    version='1.0.0',
    description='Infix scientific calculator',
    install_requires=[
        'regex',
        'prompt_toolkit',
    ],
    packages=['sycalc'],
    package_dir={'': 'src'},
    include_package_data=True,
    zip_safe=False,
    python_requires='>=3.11',
    classifiers=[
        "Programming Language :: Python :: 3",
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-cov',
        ],
    },
    scripts=glob('bin/*'),
    license='ISC',
)
