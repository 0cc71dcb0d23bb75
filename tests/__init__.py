# Tests for the coaxial capacitor simulation
#
# Running tests:
#   pytest tests/
#   pytest tests/test_search.py -v
