import sys

from image_template.cli import main

if __name__ == "__main__":
    sys.exit(main())
