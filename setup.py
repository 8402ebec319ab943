"""phpasslib setup script"""
#=========================================================
#init script env - ensure cwd = root of source dir
#=========================================================
import os
root_dir = os.path.abspath(os.path.join(__file__,".."))
os.chdir(root_dir)

#=========================================================
#imports
#=========================================================
import re

from setuptools import setup

#=========================================================
#version string
#=========================================================
with open(os.path.join(root_dir, "phpasslib", "__init__.py")) as vh:
    VERSION = re.search(r'^__version__\s*=\s*"(.*?)"\s*$', vh.read(), re.M).group(1)

#=========================================================
#static text
#=========================================================
SUMMARY = "parse, verify & generate phpass portable ($P$) password hashes"

DESCRIPTION = """\
phpasslib is a small library for interoperating with the "portable" password
hashes produced by phpass, as stored by WordPress, phpBB and other PHP
applications (``$P$`` followed by a rounds character, an 8 character salt,
and a 22 character md5 checksum).

It parses and validates existing hashes, verifies passwords against them,
and can generate new hashes for systems which still need to write this format.
The scheme is md5 based and weak by modern standards; phpasslib exists for
compatibility, not as a recommendation.
"""

KEYWORDS = "password hash phpass wordpress phpbb portable md5 crypt"

#=========================================================
#config setup
#=========================================================
config = dict(
    #package info
    packages = [
        "phpasslib",
            "phpasslib.tests",
            "phpasslib.utils",
        ],
    zip_safe=True,
    python_requires=">=3.7",

    #metadata
    name = "phpasslib",
    version = VERSION,
    license = "BSD",

    description = SUMMARY,
    long_description = DESCRIPTION,
    keywords = KEYWORDS,
    classifiers = [
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: BSD License",
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Topic :: Security :: Cryptography",
        "Topic :: Software Development :: Libraries",
    ],

    extras_require = {
        "test": ["pytest"],
    },
)

#=========================================================
#build
#=========================================================
setup(**config)

#=========================================================
#EOF
#=========================================================
