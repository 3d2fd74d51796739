"""
Removal of server-assigned task definition attributes.

register_task_definition rejects these when a described task definition
is sent back as-is.
"""
READ_ONLY_FIELDS = (
    "compatibilities",
    "requiresAttributes",
    "status",
    "revision",
    "taskDefinitionArn",
)


def sanitize_task_definition(task_definition: dict) -> dict:
    for field in READ_ONLY_FIELDS:
        task_definition.pop(field, None)
    return task_definition
