"""
This module provides a class implementing default __str__ and __repr__ functionality.
"""


class AttributePrinting:
    """
    A mixin class that provides __str__ and __repr__ functionality.

    The representation lists the class name followed by every public attribute.  Attributes which start with an
    underscore are reported through the property of the same name without the underscore when one exists and are
    skipped otherwise.
    """

    def _build_representation(self, attribute_repr: bool) -> str:
        """
        Turns the class into a string including all attributes.

        :param attribute_repr: Whether to call repr on attributes instead of str.
        """

        attributes = []
        for attr, value in self.__dict__.items():
            if attr.startswith('_'):
                prop_name = attr.lstrip('_')
                if not isinstance(getattr(type(self), prop_name, None), property):
                    continue
                attr = prop_name
                value = getattr(self, prop_name)

            text = repr(value) if attribute_repr else str(value)
            attributes.append(f"{attr}={text}".replace('\n', ''))

        return f"{type(self).__name__}({', '.join(attributes)})"

    def __str__(self) -> str:
        return self._build_representation(False)

    def __repr__(self) -> str:
        return self._build_representation(True)
