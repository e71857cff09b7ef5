NU_GRAMMAR = r"""
start: _pipelines

_pipelines: pipeline (";" pipeline)*

// Empty commands are allowed so `ls |` and `a;;b` still parse while typing
pipeline: command? ("|" command?)*

command: _expr+

_expr: val_string
     | val_interpolated
     | val_variable
     | subexpression
     | bare_word
     | error

subexpression: LPAR _pipelines RPAR

val_string: DQ_STRING | SQ_STRING
val_interpolated: INTERP_DQ | INTERP_SQ
val_variable: VARIABLE
bare_word: WORD

// An unterminated quote swallows the rest of the line. UNCLOSED and
// STRAY_RPAR are produced by ParenBalancer, never by the lexer.
error: UNTERMINATED
     | STRAY_RPAR
     | LPAR _pipelines UNCLOSED

LPAR: "("
RPAR: ")"

DQ_STRING.2: /"(?:\\.|[^"\\])*"/s
SQ_STRING.2: /'[^']*'/
INTERP_DQ.2: /\$"(?:\\.|[^"\\])*"/s
INTERP_SQ.2: /\$'[^']*'/
UNTERMINATED.2: /\$?"(?:\\.|[^"\\])*\\?\Z/s
              | /\$?'[^']*\Z/s

VARIABLE: /\$[^\s()|;'"]*/
WORD: /[^\s()|;'"$][^\s()|;'"]*/

%declare UNCLOSED STRAY_RPAR

WS: /\s+/
%ignore WS
"""
