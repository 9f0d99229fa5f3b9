"""
Output targets.

Each subpackage implements :class:`~scene_codegen.core.SceneExporter`
for one UI framework.
"""
