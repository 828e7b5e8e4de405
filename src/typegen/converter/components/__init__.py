"""Component generators, one per supported component category.

Each module exposes the same three functions:

* ``namespace_declaration()`` -- the category's top-level namespace,
  registered by the driver with :meth:`~typegen.walker.store.Store.add_component`;
* ``generate_namespace(context, entries)`` -- generate every entry of the
  category;
* ``materialize(context, reference)`` -- generate one entry; called by the
  context bridge, never directly.

``securitySchemes`` and ``pathItems`` are part of the component registry but
produce no declarations.
"""

from typegen.converter.components import headers, parameters, request_bodies, responses, schemas

COMPONENT_GENERATORS = {
    schemas.CATEGORY: schemas,
    headers.CATEGORY: headers,
    responses.CATEGORY: responses,
    parameters.CATEGORY: parameters,
    request_bodies.CATEGORY: request_bodies,
}

__all__ = ["COMPONENT_GENERATORS"]
