"""JSON request bodies shared by schema and route tests."""


def var(name):
    return {"kind": "var", "name": name}


def app(fn, arg, info="explicit"):
    return {"kind": "app", "fn": fn, "arg": arg, "info": info}


def unit_vector_descriptor():
    """`MkUnitVector : {0 n : Nat} -> (value : Vect n Double) -> (proof : IsUnitVector value) -> UnitVector n`."""
    return {
        "name": "UnitVector",
        "params": [{"name": "n", "type": var("Nat")}],
        "constructors": [
            {
                "name": "MkUnitVector",
                "args": [
                    {"kind": "param", "index": 0},
                    {
                        "kind": "named",
                        "name": "value",
                        "type": app(
                            app(var("Vect"), {"kind": "param", "index": 0}),
                            var("Double"),
                        ),
                    },
                    {
                        "kind": "named",
                        "name": "proof",
                        "type": app(var("IsUnitVector"), var("value")),
                    },
                ],
            },
        ],
        "location": {"file": "src/Data/UnitVector.idr", "line": 12, "column": 1},
    }


def percent_descriptor():
    return {
        "name": "Percent",
        "constructors": [
            {
                "name": "MkPercent",
                "args": [
                    {"kind": "named", "name": "value", "type": var("Double")},
                    {
                        "kind": "named",
                        "name": "prf",
                        "multiplicity": "zero",
                        "explicitness": "auto_implicit",
                        "type": app(
                            app(app(var("FromTo"), {"kind": "lit", "value": 0}),
                                {"kind": "lit", "value": 100}),
                            var("value"),
                        ),
                    },
                ],
            },
        ],
    }
