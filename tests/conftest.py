import pytest

SCHEME_XML = """<scheme name="Cyan Harbor" version="142" parent_scheme="Darcula">
  <metaInfo>
    <property name="ide">Rider</property>
  </metaInfo>
  <colors>
    <option name="CARET_COLOR" value="ffcc00" />
    <option name="LINE_NUMBERS_COLOR" value="4b6469" />
    <option name="SELECTION_BACKGROUND" value="2f4f56" />
  </colors>
  <attributes>
    <option name="TEXT">
      <value>
        <option name="FOREGROUND" value="c3ced6" />
        <option name="BACKGROUND" value="1f2b30" />
      </value>
    </option>
    <option name="DEFAULT_KEYWORD">
      <value>
        <option name="FOREGROUND" value="c792ea" />
        <option name="FONT_TYPE" value="1" />
      </value>
    </option>
    <option name="DEFAULT_STRING">
      <value>
        <option name="FOREGROUND" value="c3e88d" />
      </value>
    </option>
    <option name="DEFAULT_LINE_COMMENT">
      <value>
        <option name="FOREGROUND" value="546e7a" />
        <option name="FONT_TYPE" value="2" />
      </value>
    </option>
    <option name="DEFAULT_NUMBER">
      <value>
        <option name="FOREGROUND" value="f78c6c" />
      </value>
    </option>
    <option name="CSS.CLASS_NAME">
      <value>
        <option name="FOREGROUND" value="ffcb6b" />
      </value>
    </option>
    <option name="SQL_KEYWORD">
      <value>
        <option name="FONT_TYPE" value="1" />
      </value>
    </option>
    <option name="DEFAULT_SEMICOLON">
      <value>
        <option name="FOREGROUND" value="89ddff" />
      </value>
    </option>
  </attributes>
</scheme>
"""


@pytest.fixture
def scheme_xml():
    return SCHEME_XML


@pytest.fixture
def scheme_file(tmp_path):
    path = tmp_path / "cyan-harbor.xml"
    path.write_bytes(SCHEME_XML.encode("utf-8"))
    return path
