import sys

from toy.compiler import compile
from toy.reporter import InternalError
from toy.tools    import Tools

def main(argv = None):
    """
    usage:
    python3 toyc.py [-t] [-a] <filename>

    runs the program and prints the final bindings, or its diagnostics
    """
    # preliminary objects
    tools       = Tools()

    # parse args
    args        = tools.parseargs(argv)

    # filename to source
    source      = tools.readsource(args.input)
    if source is None:
        return 1

    try:
        # optional dumps
        if args.print_tokens:
            tools.dump_tokens(source)
        if args.print_ast:
            tools.dump_ast(source)

        # source to bindings
        result  = compile(source, args.input)

    except InternalError as e:
        print(f"[ Fatal Error ] | {e}", file = sys.stderr)
        return 1

    return tools.report(result)


if __name__ == "__main__":
    sys.exit(main())
