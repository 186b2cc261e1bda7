import sys

from pokedex.main import main

if __name__ == "__main__":
    sys.exit(main())
