# capis

capis sends HTTP requests that are described in YAML files. It logs what
comes back: the status code, the response headers, the body and every
`Set-Cookie` line.

## Installation

```
pip install .
```

To install what the tests need as well:

```
pip install .[test]
```

## Usage

```
capis request.yaml other.yaml
capis --verbose request.yaml
```

Every argument that does not start with `-` is taken as a YAML file. capis
handles the files one after another. `-v` or `--verbose` prints the parsed
request description to standard output before the request is sent. It also
logs the request line, the request headers and the body. capis ignores any
other option. If a file cannot be opened or parsed, or its request fails,
capis logs an error and goes on to the next file. The command always exits
with status 0.

Log lines go to standard error, coloured by level (`INFO`, `WARN`,
`ERROR`), and look like this:

```
[2024-01-01 12:00:00 INFO]  Request successful - Status Code: 200
```

## Request files

Every key is optional. Top-level keys are not case sensitive. capis reads
only the first YAML document in a file. If that document is a list, capis
uses the first mapping it finds inside the list.

```yaml
method: POST            # GET (default), POST, PUT, UPDATE or DELETE
host: api.example.com   # default: localhost
path: /login            # default: /
url: ""                 # if set, used instead of host and path
timeout: 5000           # milliseconds; 0 means no timeout
secure: true            # default true
headers:
  Accept: application/json
params:
  - key: user
    value: someone@example.com
cookies:
  - name: session
    value: token
    domain: example.com
    path: /
    secure: true
    httponly: true
```

- `method` must be written exactly in capitals. A name capis does not know
  counts as `GET`.
- `secure` and the cookie flags are true only when they are the word
  `true`. If `secure` is not true, TLS certificate checks are turned off, a
  warning is logged, and a URL built from `host` and `path` uses `http://`
  instead of `https://`.
- `timeout` takes the leading integer of its value.
- `headers` and `params` can be a mapping or a list of `key`/`value`
  entries. List entries that lack `key` or `value` are skipped.
- Each cookie needs both a `name` and a `value`. `domain`, `path`
  (default `/`), `expires`, `secure` and `httponly` are optional. capis
  sends all cookies in one `Cookie` header, with their attributes written
  after each cookie.

For GET requests the params are added to the query string. For POST and
PUT requests they are sent as a form body, and the body is empty if there
are no params. If a POST or PUT request has no `Content-Type` header, capis
sends `application/x-www-form-urlencoded`. UPDATE and DELETE requests have
no body. capis follows redirects.

## Library use

```python
from capis.read_yaml import load_metadata
from capis.easy_curl import do_easy_curl

metadata = load_metadata("request.yaml")
response = do_easy_curl(metadata, verbose=False)
print(response.status_code, response.set_cookies)
print(response.text)
```

- `capis.read_yaml.read_yaml(stream)` parses a string, bytes or an open
  file. `load_metadata(path)` opens a file and parses it. Both return a
  `capis.metadata.Metadata` and raise `MetadataError` if the YAML is not
  valid.
- `capis.easy_curl.do_easy_curl(metadata, verbose)` sends the request and
  returns a `Response`. It raises `RequestError` if the request cannot be
  completed.
- A `Response` holds `status_code`, `headers` (the raw header text of every
  response, redirects included), `body` (bytes), `text` (the body decoded
  as UTF-8) and `set_cookies` (each `Set-Cookie: ...` line).
- `resolve_url`, `request_url`, `request_headers`, `request_body`,
  `query_string` and `cookie_header` show what would be sent without
  sending it.
- `capis.metadata.format_metadata` and `print_metadata` render a
  description. `capis.utils.split_lines` splits text on CR, LF or CRLF and
  drops empty lines.

## What capis does not do

capis sends one request per file, one file at a time. It does not run
requests in parallel. It does not save responses anywhere; they are only
logged. Parameter values are sent as written and are not URL-encoded.