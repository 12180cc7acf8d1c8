"""
Builder Field Inference Example
===============================

Plans the builder fields of a constructor like

    @CallBuilder
    Person(
        @BuilderField(style = StringAppending.class) String name,
        @BuilderField(style = ArrayListAdding.class) ArrayList<String> nicknames,
        @BuilderField(style = SetAdding.class) Set<T> tags,
        int age)

demonstrating:
- The built-in accumulator styles
- A custom style defined from signature text
- Field and modifier types inferred by unification
"""

from callbuilder import (
    BUILTIN_STYLES,
    FieldStyle,
    Indeterminate,
    Parameter,
    parse_type,
    plan_method,
)


# ============================================================================
# A custom style
# ============================================================================

SET_ADDING = FieldStyle.parse(
    "SetAdding",
    "<E> java.util.HashSet<E> start()",
    "<E> java.util.Set<E> finish(java.util.HashSet<E> set)",
    "<E> java.util.HashSet<E> addTo(java.util.HashSet<E> set, E item)",
)


# ============================================================================
# Example Usage
# ============================================================================

def main():
    parameters = [
        Parameter("name", parse_type("java.lang.String")),
        Parameter("nicknames", parse_type("java.util.ArrayList<java.lang.String>")),
        Parameter("tags", parse_type("java.util.Set<T>", type_variables=["T"])),
        Parameter("age", parse_type("int")),
    ]
    styles = {
        "name": BUILTIN_STYLES["StringAppending"],
        "nicknames": BUILTIN_STYLES["ArrayListAdding"],
        "tags": SET_ADDING,
    }

    plan = plan_method("Person.<init>", parameters, styles)

    for field in plan.fields:
        print(f"private {field.field_type} {field.name};")
        if field.setter_name:
            print(f"  {field.setter_name}({field.field_type} {field.name})")
        for modifier in field.modifiers:
            if isinstance(modifier.parameter_types, Indeterminate):
                print(f"  {modifier.method_name}: skipped ({modifier.parameter_types.reason})")
                continue
            params = ", ".join(
                f"{t} {n}"
                for t, n in zip(modifier.parameter_types, modifier.parameter_names)
            )
            print(f"  {modifier.method_name}({params})")


if __name__ == "__main__":
    main()
