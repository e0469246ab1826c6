import sys

from scriptgif.main import main

if __name__ == '__main__':
    sys.exit(main())
