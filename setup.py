from lantern_protocol import VERSION

from setuptools import setup, find_packages
import os

packages = []

readme_location = os.path.join(os.path.dirname(__file__), "README.rst")

# __file__ can sometimes be "" instead of what we want
# in that case we assume we're already in this directory
this_dir = os.path.dirname(__file__) or "."

for filename in sorted(os.listdir(this_dir)):
    if filename.startswith("lantern_") and os.path.isdir(os.path.join(this_dir, filename)):
        packages.extend(
            [filename]
            + ["{0}.{1}".format(filename, pkg) for pkg in find_packages(os.path.join(this_dir, filename))]
        )

# fmt: off

setup(
      name = "lantern"
    , version = VERSION
    , packages = packages
    , include_package_data = True

    , python_requires = ">= 3.7"

    , install_requires =
      [ "delfick_project>=0.7.9"
      , "attrs>=22.2.0"

      # lantern-protocol
      , "bitarray>=2.3.0"
      ]

    , extras_require =
      { "tests":
        [ "pytest>=6.1.2"
        ]
      }

    # metadata for upload to PyPI
    , description = "A codec for the LIFX LAN protocol"
    , long_description = open(readme_location).read()
    , license = "MIT"
    , keywords = "lifx lan protocol"
    )

# fmt: on
