import os
import os.path
import re

from setuptools import setup


here = os.path.abspath(os.path.dirname(__file__))

# Read the version number from a source file.
def find_version(*file_paths):
    with open(os.path.join(here, *file_paths), 'r', encoding='utf8') as f:
        version_file = f.read()

    # The version line must have the form
    # __version__ = 'ver'
    version_match = re.search(r"^__version__ = ['\"]([^'\"]*)['\"]",
                              version_file, re.M)
    if version_match:
        return version_match.group(1)
    raise RuntimeError("Unable to find version string.")


version = find_version('futon', '__init__.py')
readme = os.path.join(here, 'README.rst')
long_description = open(readme).read() if os.path.exists(readme) else ''


setup(
    name='tornado-futon',
    version=version,
    description="Blocking and non-blocking (asynchronous) CouchDB clients with revision-aware document operations, using Tornado's httpclient",
    long_description=long_description,
    license="MIT License",
    packages=['futon', 'futon.tests'],
    python_requires='>=3.7',
    install_requires=['tornado>=6.0'],
    extras_require={'test': ['pytest']},
    classifiers=[
        'Development Status :: 4 - Beta',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Topic :: Database :: Front-Ends',
    ],
)
