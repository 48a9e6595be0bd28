"""
ContentTools editable regions for Django templates.

Wrap any part of a template with {% content_tools %} ... {% end_content_tools %}
and emit the collected editor scripts with {% content_tools_scripts %}.
"""
