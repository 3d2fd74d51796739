"""
Prepare an updated ECS task definition for a service deployment.

Reads the task definition a service is currently running, points the target
container at a new image, refreshes the build identity environment variables
and writes a resubmittable copy to disk.
"""
