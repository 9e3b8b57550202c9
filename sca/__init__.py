"""
Invoke entrypoint, import here all the tasks we want to make available
"""

from invoke import Collection

from sca import analysis, invoke_unit_tests

# the root namespace
ns = Collection()

# add namespaced tasks to the root
ns.add_collection(analysis, "sca")
ns.add_collection(invoke_unit_tests, "unit-tests")
