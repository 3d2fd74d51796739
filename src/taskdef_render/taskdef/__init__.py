"""
Pure transformations over ECS task definition documents.
"""
