"""Allow `python -m nestlaunch`"""

from nestlaunch.cli import main

if __name__ == "__main__":
    main()
