"""Domain models and errors.

Pure data structures describing binaries, versions, processes and devices.
Nothing in here spawns processes or touches the filesystem.
"""
