import dataclasses as dc
import enum
import ply.lex
import re

class TokenKind(enum.Enum):
    LITERAL     = "Literal"
    IDENTIFIER  = "Identifier"
    EQUAL       = "Equal"
    LEFT_PAREN  = "LeftParen"
    RIGHT_PAREN = "RightParen"
    STAR        = "Star"
    PLUS        = "Plus"
    MINUS       = "Minus"
    SEMICOLON   = "Semicolon"
    END_OF_FILE = "EndOfFile"
    WHITESPACE  = "Whitespace"
    UNKNOWN     = "Unknown"

    def pprint(self):
        return self.value

def column(source, offset):
    """
    1-based column of `offset`, counted from the last line break before it
    """
    return offset - (source.rfind("\n", 0, offset) + 1) + 1

### TOKEN CLASS ###

# never holds its text: slice the source with [start, end)

@dc.dataclass(frozen = True)
class Token:
    kind        : TokenKind
    start       : int
    end         : int
    line        : int

    def lexeme(self, source):
        return source[self.start:self.end]

    def column(self, source):
        return column(source, self.start)

    def pprint(self, source):
        return (f"{self.line}:{self.column(source)} "
                f"{self.kind.pprint()} `{self.lexeme(source)}`")

class Lexer:
    tokens = (
        'LITERAL'       ,
        'IDENTIFIER'    ,

        # Punctuation
        'EQUAL'         ,
        'LEFT_PAREN'    ,
        'RIGHT_PAREN'   ,
        'STAR'          ,
        'PLUS'          ,
        'MINUS'         ,
        'SEMICOLON'     ,

        'WHITESPACE'    ,
        'UNKNOWN'       ,
    )

    t_EQUAL       = re.escape('=')
    t_LEFT_PAREN  = re.escape('(')
    t_RIGHT_PAREN = re.escape(')')
    t_STAR        = re.escape('*')
    t_PLUS        = re.escape('+')
    t_MINUS       = re.escape('-')
    t_SEMICOLON   = re.escape(';')

    def __init__(self):
        self.lexer = ply.lex.lex(module = self)

    # whitespace is kept so that token ranges cover the whole source
    def t_WHITESPACE(self, t):
        r'[ \t\n\r\f]+'
        t.lexer.lineno += t.value.count("\n")
        return t

    def t_IDENTIFIER(self, t):
        r'[a-zA-Z_][a-zA-Z0-9_]*'
        return t

    def t_LITERAL(self, t):
        r'[0-9]+'
        return t

    def t_error(self, t):
        t.type  = 'UNKNOWN'
        t.value = t.value[0]
        t.lexer.skip(1)
        return t

    def tokenize(self, source):
        """
        lazily yield every token of `source`, whitespace included,
        ending with a single END_OF_FILE
        """
        lexer = self.lexer.clone()
        lexer.lineno = 1
        lexer.input(source)

        for t in iter(lexer.token, None):
            yield Token(
                kind    = TokenKind[t.type],
                start   = t.lexpos,
                end     = t.lexpos + len(t.value),
                line    = t.lineno,
            )

        yield Token(
            kind    = TokenKind.END_OF_FILE,
            start   = len(source),
            end     = len(source),
            line    = lexer.lineno,
        )

    def significant(self, source):
        """
        the tokens the parser sees: everything but whitespace
        """
        return [token for token in self.tokenize(source)
                if token.kind is not TokenKind.WHITESPACE]
