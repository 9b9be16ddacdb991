"""core/ -- Form validation, the login state machine, navigation and settings.

Layer rule: core/ is the kernel. It does not import from auth/ or api/.
"""
