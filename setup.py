"""Install the submission relay package."""

from setuptools import setup, find_packages

setup(
    name='submission-relay',
    version='0.1.0',
    packages=find_packages(exclude=['*.tests']),
    zip_safe=False,
    python_requires='>=3.8',
    install_requires=[
        'boto3',
        'botocore',
        'google-auth',
        'google-api-core',
        'google-cloud-storage',
        'httpx>=0.23',
        'python-http-client',
        'pytz',
        'sendgrid>=6'
    ],
    extras_require={
        'test': ['pytest']
    },
    include_package_data=True
)
