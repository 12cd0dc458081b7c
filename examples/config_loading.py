"""config_loading.py"""
import sys

from flagwise.config import loader

options = loader("flagwise.yaml")

if __name__ == "__main__":
    result = options.parse_or_exit(sys.argv)
    print(result.as_dict())
