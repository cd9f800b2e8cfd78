"""Module and console entrypoint.

- Development: python -m tidyco
- Installed:   tidyco
"""

from main import main


def __main__() -> None:
    main()


if __name__ == "__main__":
    __main__()
