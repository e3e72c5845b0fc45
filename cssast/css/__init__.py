"""
References:
    - [rework css](https://github.com/reworkcss/css)
    - [at-rules](https://developer.mozilla.org/en-US/docs/Web/CSS/At-rule)
    - [@media](https://developer.mozilla.org/en-US/docs/Web/CSS/@media)
    - [@font-face](https://developer.mozilla.org/en-US/docs/Web/CSS/@font-face)
    - [@page](https://developer.mozilla.org/en-US/docs/Web/CSS/@page)

<stylesheet>
    <charset/> <import/> <namespace/> <comment/>
    <rule selectors="...">
        <property name="..." value="..."/>
    </rule>
    <media prefix="...">
        <rule/> <media/> ...
    </media>
    <font-face> <property/> </font-face>
</stylesheet>

rule => selector token followed by property/comment tokens,
group => media, keyframes, supports, document closed by `block-end`,
declaration group => font-face, viewport, page closed by `block-end`,
"""
